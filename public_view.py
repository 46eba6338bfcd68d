# public_view.py - Read-only view of a biography shared by its public id
import copy
import logging

from biography_model import LIFE_SECTIONS
from exceptions import NotFoundError
from story_composer import story_text

logger = logging.getLogger(__name__)


def project(biography):
    """Build the shareable view. Owner and account fields are never included."""
    return {
        "publicId": biography["visibility"]["publicId"],
        "customization": copy.deepcopy(biography["customization"]),
        "personalInformation": copy.deepcopy(biography["personalInformation"]),
        "timeline": copy.deepcopy(biography["timeline"]),
        "sections": [
            {"key": section.key, "label": section.label, "summary": biography[section.key]["summary"]}
            for section in LIFE_SECTIONS
        ],
        "hasDraft": biography["narrativeDraft"] is not None,
        "story": story_text(biography),
        "updatedAt": biography["updatedAt"]
    }


def get_public_biography(store, public_id):
    """Resolve a share link. Unknown and private ids fail the same way."""
    biography = store.find_by_public_id(public_id)
    if biography is None or not biography["visibility"]["isPublic"]:
        logger.info("Public biography lookup missed for %r", public_id)
        raise NotFoundError(public_id)
    return project(biography)
