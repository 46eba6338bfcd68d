"""
Shared pytest fixtures for biography tests.
"""

import pytest
from unittest.mock import MagicMock

from biography_model import normalize_biography
from biography_store import BiographyStore


@pytest.fixture
def sample_record():
    """A filled-in biography as the storage layer would return it."""
    return {
        "userId": "user-1",
        "personalInformation": {
            "name": "Ada Example",
            "dateOfBirth": "1950-04-02",
            "birthplace": "Leeds",
            "background": "Grew up above a bakery.",
        },
        "childhoodMemories": {"summary": "Flour on every surface."},
        "educationJourney": {"summary": "Night school in mathematics."},
        "careerAchievements": {"summary": "Built the first ledger system at the mill."},
        "familyRelationships": {"summary": "Three children, seven grandchildren."},
        "challengesLessons": {"summary": "Lost the bakery in the flood of 1968."},
        "dreamsBeliefs": {"summary": "Every family deserves a written history."},
        "timeline": [
            {"id": "evt-1", "title": "Born", "date": "1950-04-02", "description": "Arrived in Leeds"},
            {"id": "evt-2", "title": "Graduated", "date": "1972-06-30", "description": "BSc Mathematics",
             "notes": "First in the family"},
        ],
        "voice": "professional",
        "customization": {
            "title": "My Life",
            "subtitle": "A Journey",
            "font": "Merriweather",
            "favoriteQuote": "Keep the oven warm.",
        },
        "visibility": {"isPublic": False, "publicId": None},
        "createdAt": "2024-01-01T00:00:00+00:00",
        "updatedAt": "2024-01-02T00:00:00+00:00",
    }


@pytest.fixture
def biography(sample_record):
    return normalize_biography(sample_record)


@pytest.fixture
def empty_biography():
    return normalize_biography({"userId": "user-empty"}, now="2024-01-01T00:00:00+00:00")


@pytest.fixture
def store(tmp_path):
    return BiographyStore(base_path=str(tmp_path / "biographies"))


@pytest.fixture
def mock_biographer():
    """Biographer stand-in that returns a fixed story without calling the API."""
    biographer = MagicMock()
    biographer.write_story.return_value = "# Generated\n\nA new story."
    return biographer
