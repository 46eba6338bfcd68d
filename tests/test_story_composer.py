import pytest

from biography_model import LIFE_SECTIONS, normalize_biography
from markup_tokenizer import TokenKind, tokenize
from story_composer import EMPTY_SECTION, compose, story_text


def test_title_and_subtitle_come_first(biography):
    lines = compose(biography).split("\n")

    assert lines[:2] == ["# My Life", "## A Journey"]


def test_layout_of_sections_and_quote(biography):
    lines = compose(biography).split("\n")

    assert lines == [
        "# My Life",
        "## A Journey",
        "",
        "### Childhood Memories",
        "Flour on every surface.",
        "",
        "### Education Journey",
        "Night school in mathematics.",
        "",
        "### Career & Achievements",
        "Built the first ledger system at the mill.",
        "",
        "### Family & Relationships",
        "Three children, seven grandchildren.",
        "",
        "### Life Challenges & Lessons",
        "Lost the bakery in the flood of 1968.",
        "",
        "### Dreams, Beliefs & Future Goals",
        "Every family deserves a written history.",
        "",
        "> Keep the oven warm.",
    ]


def test_empty_biography_uses_placeholders(empty_biography):
    lines = compose(empty_biography).split("\n")

    assert lines[0] == "# Autobiography"
    assert not any(line.startswith("## ") for line in lines)
    assert lines.count(EMPTY_SECTION) == 6
    assert not any(line.startswith("> ") for line in lines)


@pytest.mark.parametrize("record", [
    {},
    {"customization": {"title": "Line one\n# Line two", "subtitle": "Sub\n# title"}},
    {"childhoodMemories": {"summary": "# Not a title\n## Nor this\n> nor a quote"}},
    {"dreamsBeliefs": {"summary": "# # nested markers"}, "customization": {"favoriteQuote": "a\n# b"}},
])
def test_only_the_first_token_is_a_title(record):
    tokens = tokenize(compose(normalize_biography(record)))

    assert tokens[0].kind is TokenKind.HEADING1
    assert all(token.kind is not TokenKind.HEADING1 for token in tokens[1:])


def test_section_order_survives_tokenizing(sample_record):
    sample_record["careerAchievements"]["summary"] = "### Sneaky heading"
    tokens = tokenize(compose(normalize_biography(sample_record)))

    headings = [token.text for token in tokens if token.kind is TokenKind.HEADING3]
    assert headings == [section.label for section in LIFE_SECTIONS]


def test_multiline_summary_keeps_its_lines(sample_record):
    sample_record["familyRelationships"]["summary"] = "First paragraph.\n\nSecond paragraph."
    lines = compose(normalize_biography(sample_record)).split("\n")

    start = lines.index("### Family & Relationships")
    assert lines[start + 1:start + 4] == ["First paragraph.", "", "Second paragraph."]


class TestStoryText:

    def test_fallback_without_draft(self, biography):
        assert story_text(biography) == compose(biography)

    def test_draft_wins_over_sections(self, biography):
        biography["narrativeDraft"] = "# Drafted"

        assert story_text(biography) == "# Drafted"

    def test_override_wins_over_draft(self, biography):
        biography["narrativeDraft"] = "# Drafted"

        assert story_text(biography, "# One-off") == "# One-off"
        assert story_text(biography, "   ") == "# Drafted"
