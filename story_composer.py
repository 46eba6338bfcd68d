# story_composer.py - Markup text built from the structured sections when no draft exists
import re

from biography_model import LIFE_SECTIONS, display_title

EMPTY_SECTION = "No content provided."

_MARKER = re.compile(r"^(?:(?:#{1,3}|>) )+")
_WHITESPACE = re.compile(r"\s+")


def _single_line(text):
    return _WHITESPACE.sub(" ", text).strip()


def _summary_lines(summary):
    # Section text must stay body text: drop heading/quote markers it may carry
    lines = [_MARKER.sub("", line, count=1) for line in summary.strip().split("\n")]
    return [line.rstrip("\r") for line in lines]


def compose(biography):
    """Serialize the structured sections into line-oriented markup.

    Both exporters and the public view render this text unchanged when the
    biography has no narrative draft.
    """
    customization = biography["customization"]
    lines = [f"# {_single_line(display_title(biography))}"]

    subtitle = _single_line(customization["subtitle"])
    if subtitle:
        lines.append(f"## {subtitle}")

    for section in LIFE_SECTIONS:
        lines.append("")
        lines.append(f"### {section.label}")
        summary = biography[section.key]["summary"]
        if summary.strip():
            lines.extend(_summary_lines(summary))
        else:
            lines.append(EMPTY_SECTION)

    quote = _single_line(customization["favoriteQuote"])
    if quote:
        lines.append("")
        lines.append(f"> {quote}")

    return "\n".join(lines)


def story_text(biography, override=None):
    """The markup a document is rendered from: override, then draft, then fallback."""
    if isinstance(override, str) and override.strip():
        return override
    if biography.get("narrativeDraft"):
        return biography["narrativeDraft"]
    return compose(biography)
