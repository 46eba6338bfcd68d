# markup_tokenizer.py - Line-oriented markup to typed tokens
from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    QUOTE = "quote"
    BLANK = "blank"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""


# Checked top-down, first match wins; "### " must precede "## " and "# "
PREFIXES = (
    ("### ", TokenKind.HEADING3),
    ("## ", TokenKind.HEADING2),
    ("# ", TokenKind.HEADING1),
    ("> ", TokenKind.QUOTE),
)


def tokenize_line(line):
    if not line.strip():
        return Token(TokenKind.BLANK)
    for prefix, kind in PREFIXES:
        if line.startswith(prefix):
            return Token(kind, line[len(prefix):].strip())
    return Token(TokenKind.PARAGRAPH, line.strip())


def tokenize(markup_text):
    """Turn markup text into one token per line, in order.

    Empty input gives an empty list. Lines are split on ``\\n`` and a
    trailing ``\\r`` is dropped, so CRLF text behaves like LF text.
    """
    if not markup_text:
        return []
    return [tokenize_line(line.rstrip("\r")) for line in markup_text.split("\n")]
