# prompts.py - Generation prompt assembled from a normalized biography
from biography_model import LIFE_SECTIONS, VOICES
from exceptions import ValidationError

SYSTEM_PROMPT = "You are an award-winning memoir writer who turns personal notes into polished autobiographies."

NO_EVENTS = "No events provided"
EMPTY_SUMMARY = "No content"
UNKNOWN = "Unknown"
NO_BACKGROUND = "No background provided"

MARKUP_RULES = """Format the response as plain text using only these line markers:
- "# " at the start of the line for the title
- "## " for the subtitle
- "### " for each section heading
- "> " for a quote
Separate paragraphs with a blank line. Do not use any other Markdown syntax."""


def resolve_voice(voice):
    """Return the voice id, or raise if it is not one of the known voices."""
    if not isinstance(voice, str) or voice not in VOICES:
        raise ValidationError(
            f"Unknown voice. Expected one of: {', '.join(VOICES)}",
            field="voice",
            value=voice,
        )
    return voice


def format_timeline(timeline):
    lines = []
    for index, event in enumerate(timeline, 1):
        line = f"{index}. {event['title']} ({event['date']}) - {event['description']}"
        if event["notes"].strip():
            line += f" Notes: {event['notes']}"
        lines.append(line)
    return "\n".join(lines) or NO_EVENTS


def build_prompt(biography, voice):
    voice = resolve_voice(voice)
    personal = biography["personalInformation"]

    sections = "\n".join(
        f"{section.prompt_label}: {biography[section.key]['summary'].strip() or EMPTY_SUMMARY}"
        for section in LIFE_SECTIONS
    )

    return f"""You are an award-winning memoir writer. Using the data provided, craft a compelling autobiography chapter outline and narrative.

Desired voice: {voice.upper()} - {VOICES[voice]['guidance']}

Structure the response using:
1. Title
2. Subtitle or opening quote
3. Chronological sections with headings (Childhood, Education, Career, Family, Challenges, Dreams)
4. Each section should include paragraphs weaving facts with reflections.
5. Conclude with a resonant closing paragraph about future aspirations.

Personal details:
- Name: {personal['name'].strip() or UNKNOWN}
- Birthdate: {personal['dateOfBirth'].strip() or UNKNOWN}
- Birthplace: {personal['birthplace'].strip() or UNKNOWN}
- Background: {personal['background'].strip() or NO_BACKGROUND}

{sections}

Timeline events:
{format_timeline(biography['timeline'])}

Blend the timeline into the narrative where natural. Do not list the events verbatim or repeat raw bullet lists.

{MARKUP_RULES}"""
