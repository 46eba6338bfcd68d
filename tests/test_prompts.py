import pytest

from biography_model import VOICES, normalize_biography
from exceptions import ValidationError
from prompts import NO_EVENTS, build_prompt, format_timeline, resolve_voice


def test_timeline_line_format():
    biography = normalize_biography({
        "timeline": [{"title": "A", "date": "2020-01-01", "description": "x"}]
    })

    assert "1. A (2020-01-01) - x" in build_prompt(biography, "simple").split("\n")


def test_timeline_notes_clause(biography):
    lines = format_timeline(biography["timeline"]).split("\n")

    assert lines == [
        "1. Born (1950-04-02) - Arrived in Leeds",
        "2. Graduated (1972-06-30) - BSc Mathematics Notes: First in the family",
    ]


def test_empty_timeline(empty_biography):
    assert format_timeline([]) == NO_EVENTS
    assert "No events provided" in build_prompt(empty_biography, "emotional")


def test_empty_biography_placeholders(empty_biography):
    prompt = build_prompt(empty_biography, "emotional")

    assert prompt.count(": No content\n") == 6
    assert "- Name: Unknown" in prompt
    assert "- Birthdate: Unknown" in prompt
    assert "- Birthplace: Unknown" in prompt
    assert "- Background: No background provided" in prompt


def test_embeds_personal_details_and_sections(biography):
    prompt = build_prompt(biography, "professional")

    assert "- Name: Ada Example" in prompt
    assert "- Birthplace: Leeds" in prompt
    assert "Childhood memories: Flour on every surface." in prompt
    assert "Dreams, beliefs & future goals: Every family deserves a written history." in prompt


@pytest.mark.parametrize("voice", list(VOICES))
def test_voice_guidance(biography, voice):
    prompt = build_prompt(biography, voice)

    assert f"Desired voice: {voice.upper()}" in prompt
    assert VOICES[voice]["guidance"] in prompt


def test_asks_for_woven_timeline_and_tokenizer_markup(biography):
    prompt = build_prompt(biography, "poetic")

    assert "Blend the timeline into the narrative" in prompt
    assert '"### " for each section heading' in prompt
    assert '"> " for a quote' in prompt


@pytest.mark.parametrize("voice", ["angry", "", None, 3, "Poetic", " poetic"])
def test_unknown_voice_is_rejected(biography, voice):
    with pytest.raises(ValidationError):
        build_prompt(biography, voice)


def test_resolve_voice_returns_known_voice():
    assert resolve_voice("poetic") == "poetic"
