# biography_manager.py - Edits, generation, sharing and export for one user's biography
import logging
import uuid

from biographer import Biographer
from biography_model import (
    CUSTOMIZATION_TEXT_FIELDS,
    EVENT_TEXT_FIELDS,
    FONTS,
    PERSONAL_FIELDS,
    SECTION_KEYS,
    new_public_id,
    utc_now,
)
from biography_publisher import export_biography
from biography_store import BiographyStore
from exceptions import ValidationError
from prompts import resolve_voice

logger = logging.getLogger(__name__)


def _text_fields(fields, allowed, group):
    if not isinstance(fields, dict):
        raise ValidationError(f"{group} must be an object", field=group, value=fields)
    cleaned = {}
    for key, value in fields.items():
        if key not in allowed:
            raise ValidationError(f"Unknown {group} field: {key}", field=f"{group}.{key}", value=value)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValidationError(f"{group}.{key} must be a string", field=f"{group}.{key}", value=value)
        cleaned[key] = value
    return cleaned


def _customization_fields(fields):
    if not isinstance(fields, dict):
        raise ValidationError("customization must be an object", field="customization", value=fields)
    font = fields.get("font")
    if font is not None and font not in FONTS:
        raise ValidationError(f"Unknown font. Expected one of: {', '.join(FONTS)}", field="font", value=font)
    cleaned = _text_fields({k: v for k, v in fields.items() if k != "font"},
                           CUSTOMIZATION_TEXT_FIELDS, "customization")
    if font is not None:
        cleaned["font"] = font
    return cleaned


def _timeline_events(events):
    if not isinstance(events, list):
        raise ValidationError("Timeline must be a list of events", field="timeline", value=events)

    seen = set()
    timeline = []
    for position, event in enumerate(events):
        if not isinstance(event, dict):
            raise ValidationError("Timeline events must be objects", field=f"timeline[{position}]", value=event)
        event_id = event.get("id")
        if event_id is None or (isinstance(event_id, str) and not event_id.strip()):
            event_id = uuid.uuid4().hex[:12]
        elif not isinstance(event_id, str):
            raise ValidationError("Event ids must be strings", field=f"timeline[{position}].id", value=event_id)
        if event_id in seen:
            raise ValidationError(f"Duplicate timeline event id: {event_id}",
                                  field=f"timeline[{position}].id", value=event_id)
        seen.add(event_id)

        fields = _text_fields({k: v for k, v in event.items() if k != "id"},
                              EVENT_TEXT_FIELDS, f"timeline[{position}]")
        timeline.append(dict({"id": event_id}, **{field: fields.get(field, "") for field in EVENT_TEXT_FIELDS}))
    return timeline


class BiographyManager:
    def __init__(self, user_id, store=None, biographer=None, image_handler=None):
        self.user_id = user_id
        self.store = store or BiographyStore()
        self.biographer = biographer or Biographer()
        self.image_handler = image_handler

    def get_biography(self):
        return self.store.find_or_create(self.user_id)

    def _commit(self, apply):
        """Apply a change to the freshly loaded record and save it under the store lock."""
        def mutate(biography):
            apply(biography)
            biography["updatedAt"] = utc_now()
        return self.store.update(self.user_id, mutate)

    # ------------------------------------------------------------------
    # Section, timeline and customization edits
    # ------------------------------------------------------------------
    def update_personal_information(self, fields):
        fields = _text_fields(fields, PERSONAL_FIELDS, "personalInformation")
        return self._commit(lambda biography: biography["personalInformation"].update(fields))

    def update_section(self, section_key, summary):
        if section_key not in SECTION_KEYS:
            raise ValidationError(f"Unknown life section: {section_key}", field="section", value=section_key)
        summary = _text_fields({"summary": summary}, ("summary",), section_key)["summary"]

        def apply(biography):
            biography[section_key]["summary"] = summary
        return self._commit(apply)

    def update_timeline(self, events):
        timeline = _timeline_events(events)

        def apply(biography):
            biography["timeline"] = timeline
        return self._commit(apply)

    def update_customization(self, fields):
        cleaned = _customization_fields(fields)
        return self._commit(lambda biography: biography["customization"].update(cleaned))

    def update_biography(self, payload):
        """Apply a partial update; every part is validated before anything is saved."""
        if not isinstance(payload, dict):
            raise ValidationError("Update payload must be an object", field="payload", value=payload)

        merges, replacements = {}, {}
        for key, value in payload.items():
            if key == "personalInformation":
                merges[key] = _text_fields(value, PERSONAL_FIELDS, key)
            elif key in SECTION_KEYS:
                summary = value.get("summary", "") if isinstance(value, dict) else value
                merges[key] = _text_fields({"summary": summary}, ("summary",), key)
            elif key == "timeline":
                replacements[key] = _timeline_events(value)
            elif key == "voice":
                replacements[key] = resolve_voice(value)
            elif key == "customization":
                merges[key] = _customization_fields(value)
            else:
                raise ValidationError(f"Field cannot be updated: {key}", field=key, value=value)

        def apply(biography):
            for key, fields in merges.items():
                biography[key].update(fields)
            biography.update(replacements)
        return self._commit(apply)

    # ------------------------------------------------------------------
    # Narrative
    # ------------------------------------------------------------------
    def save_story_draft(self, text):
        if text is not None and not isinstance(text, str):
            raise ValidationError("Story draft must be a string", field="narrativeDraft", value=text)
        draft = text if text and text.strip() else None

        def apply(biography):
            biography["narrativeDraft"] = draft
        return self._commit(apply)

    def generate_story(self, voice=None):
        """Ask the model for a narrative and store it as the draft.

        An unknown voice is rejected before the model is called. If the model
        call fails the stored draft is left untouched. Only the draft, voice
        and generation time are written back, so edits saved while the model
        was working are kept.
        """
        biography = self.get_biography()
        voice = resolve_voice(biography["voice"] if voice is None else voice)

        story = self.biographer.write_story(biography, voice)
        generated_at = utc_now()

        def apply(current):
            current["narrativeDraft"] = story
            current["voice"] = voice
            current["lastGeneratedAt"] = generated_at
        biography = self._commit(apply)
        logger.info("Generated %s story for user %s (%d chars)", voice, self.user_id, len(story))
        return story, biography

    # ------------------------------------------------------------------
    # Sharing and export
    # ------------------------------------------------------------------
    def set_visibility(self, is_public):
        if not isinstance(is_public, bool):
            raise ValidationError("isPublic must be a boolean", field="isPublic", value=is_public)

        def apply(biography):
            visibility = biography["visibility"]
            visibility["isPublic"] = is_public
            if is_public and not visibility["publicId"]:
                visibility["publicId"] = new_public_id()
        biography = self._commit(apply)
        logger.info("Biography for user %s is now %s", self.user_id, "public" if is_public else "private")
        return biography

    def export(self, fmt, story=None, title=None):
        return export_biography(self.get_biography(), fmt, story=story, title=title,
                                image_handler=self.image_handler)
