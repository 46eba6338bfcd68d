# biography_model.py - Closed sets and the normalizer for the per-user biography record
import logging
import uuid
from collections import namedtuple
from datetime import datetime, timezone

from config import DEFAULT_TITLE

logger = logging.getLogger(__name__)

# ============================================================================
# CLOSED SETS
# ============================================================================

LifeSection = namedtuple("LifeSection", ["key", "label", "prompt_label"])

# Display order is fixed; composer, prompt and projection all iterate this tuple
LIFE_SECTIONS = (
    LifeSection("childhoodMemories", "Childhood Memories", "Childhood memories"),
    LifeSection("educationJourney", "Education Journey", "Education journey"),
    LifeSection("careerAchievements", "Career & Achievements", "Career & achievements"),
    LifeSection("familyRelationships", "Family & Relationships", "Family & relationships"),
    LifeSection("challengesLessons", "Life Challenges & Lessons", "Life challenges & lessons"),
    LifeSection("dreamsBeliefs", "Dreams, Beliefs & Future Goals", "Dreams, beliefs & future goals"),
)
SECTION_KEYS = tuple(section.key for section in LIFE_SECTIONS)

VOICES = {
    "emotional": {
        "label": "Emotional",
        "description": "Rich, heartfelt storytelling.",
        "guidance": "Write with emotional depth and warmth. Emphasize sensory detail and internal reflections."
    },
    "professional": {
        "label": "Professional",
        "description": "Clear, structured narrative.",
        "guidance": "Write with clear structure, polished language, and a confident, inspiring tone suited for professional audiences."
    },
    "simple": {
        "label": "Simple",
        "description": "Accessible, straightforward voice.",
        "guidance": "Write in friendly, easy-to-read language. Use short sentences and conversational tone."
    },
    "poetic": {
        "label": "Poetic",
        "description": "Lyrical with imagery and rhythm.",
        "guidance": "Write lyrically with rich imagery, metaphors, and rhythm while keeping the narrative coherent."
    }
}
DEFAULT_VOICE = "emotional"

FONTS = ("Inter", "Playfair Display", "Merriweather", "Roboto Serif")
DEFAULT_FONT = FONTS[0]

PERSONAL_FIELDS = ("name", "dateOfBirth", "birthplace", "background")
CUSTOMIZATION_TEXT_FIELDS = ("title", "subtitle", "coverImage", "favoriteQuote")
EVENT_TEXT_FIELDS = ("title", "date", "description", "imageUrl", "notes")


# ============================================================================
# HELPERS
# ============================================================================

def utc_now():
    return datetime.now(timezone.utc).isoformat()


def _text(value):
    """Strings pass through, anything else counts as absent."""
    return value if isinstance(value, str) else ""


def _optional_text(value):
    if isinstance(value, str) and value.strip():
        return value
    return None


def _mapping(value):
    return value if isinstance(value, dict) else {}


def new_public_id():
    return uuid.uuid4().hex


def derive_event_id(index, event, taken):
    """Stable id for an event stored without one; never collides with `taken`."""
    seed = f"{index}:{_text(event.get('title'))}:{_text(event.get('date'))}"
    event_id = uuid.uuid5(uuid.NAMESPACE_URL, seed).hex[:12]
    while event_id in taken:
        seed += "'"
        event_id = uuid.uuid5(uuid.NAMESPACE_URL, seed).hex[:12]
    return event_id


# ============================================================================
# NORMALIZER
# ============================================================================

def normalize_timeline(events):
    if not isinstance(events, list):
        return []

    taken = {e.get("id") for e in events if isinstance(e, dict) and _optional_text(e.get("id"))}
    seen = set()
    timeline = []
    for index, event in enumerate(events):
        if not isinstance(event, dict):
            continue
        event_id = _optional_text(event.get("id"))
        # The first event keeps a stored id; later copies get a derived one
        if event_id is None or event_id in seen:
            event_id = derive_event_id(index, event, taken)
            taken.add(event_id)
        seen.add(event_id)
        normalized = {"id": event_id}
        for field in EVENT_TEXT_FIELDS:
            normalized[field] = _text(event.get(field))
        timeline.append(normalized)
    return timeline


def normalize_customization(customization):
    customization = _mapping(customization)
    font = customization.get("font", customization.get("fontFamily"))
    return {
        "title": _text(customization.get("title")),
        "subtitle": _text(customization.get("subtitle")),
        "coverImage": _text(customization.get("coverImage")),
        "font": font if font in FONTS else DEFAULT_FONT,
        "favoriteQuote": _text(customization.get("favoriteQuote"))
    }


def normalize_visibility(record):
    visibility = _mapping(record.get("visibility"))
    is_public = visibility.get("isPublic", record.get("isPublic"))
    is_public = is_public if isinstance(is_public, bool) else False
    public_id = _optional_text(visibility.get("publicId", record.get("publicId")))
    if is_public and public_id is None:
        public_id = new_public_id()
    return {"isPublic": is_public, "publicId": public_id}


def normalize_biography(record, user_id=None, now=None):
    """Return a complete biography dict built from a possibly partial record.

    Absent or mistyped fields get their defaults; the function never raises.
    Timeline order, unique event ids, ``publicId`` and ``createdAt`` are kept
    as stored. A public record stored without a ``publicId`` is given one.
    Output key order is fixed, so normalizing twice gives the same JSON bytes.
    """
    record = _mapping(record)

    stored_user = _optional_text(record.get("userId"))
    personal = _mapping(record.get("personalInformation"))

    voice = record.get("voice", record.get("style"))
    if not isinstance(voice, str) or voice not in VOICES:
        voice = DEFAULT_VOICE

    created_at = _optional_text(record.get("createdAt"))
    updated_at = _optional_text(record.get("updatedAt"))
    if created_at is None or updated_at is None:
        stamp = created_at or updated_at or now or utc_now()
        created_at = created_at or stamp
        updated_at = updated_at or stamp

    biography = {
        "userId": stored_user or (user_id if isinstance(user_id, str) else ""),
        "personalInformation": {field: _text(personal.get(field)) for field in PERSONAL_FIELDS},
    }
    for key in SECTION_KEYS:
        biography[key] = {"summary": _text(_mapping(record.get(key)).get("summary"))}

    biography.update({
        "timeline": normalize_timeline(record.get("timeline")),
        "narrativeDraft": _optional_text(record.get("narrativeDraft", record.get("storyDraft"))),
        "voice": voice,
        "lastGeneratedAt": _optional_text(record.get("lastGeneratedAt")),
        "customization": normalize_customization(record.get("customization")),
        "visibility": normalize_visibility(record),
        "createdAt": created_at,
        "updatedAt": updated_at
    })
    return biography


def new_biography(user_id, now=None):
    stamp = now or utc_now()
    logger.debug("Building default biography for user %s", user_id)
    return normalize_biography({"userId": user_id, "createdAt": stamp, "updatedAt": stamp})


def display_title(biography, override=None):
    if isinstance(override, str) and override.strip():
        return override.strip()
    title = biography["customization"]["title"].strip()
    return title or DEFAULT_TITLE
