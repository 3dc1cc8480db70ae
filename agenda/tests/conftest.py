"""Shared test fixtures for the agenda app."""

import copy
from typing import Any

import pytest

from agenda.management.commands._sessionize.schema import SessionizeData


FEED_URL = "https://sessionize.example.com/api/v2/abc123/view/All"

FEED_DOCUMENT: dict[str, Any] = {
    "sessions": [
        {
            "id": "1001",
            "title": "Building APIs with Django",
            "description": "From models to JSON responses.",
            "startsAt": "2026-06-01T09:00:00",
            "endsAt": "2026-06-01T10:00:00",
            "isServiceSession": False,
            "isPlenumSession": False,
            "speakers": ["spk-ada"],
            "categoryItems": [201, 101],
            "questionAnswers": [],
            "roomId": 1,
            "liveUrl": None,
            "recordingUrl": None,
            "status": "Accepted",
            "isInformed": True,
            "isConfirmed": True,
        },
    ],
    "speakers": [
        {
            "id": "spk-ada",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "bio": "Writes programs for engines.",
            "tagLine": "Analyst",
            "profilePicture": None,
            "isTopSpeaker": True,
            "links": [],
            "sessions": [1001],
            "fullName": "Ada Lovelace",
            "categoryItems": [],
            "questionAnswers": [],
        },
    ],
    "questions": [],
    "categories": [
        {
            "id": 10,
            "title": "Track",
            "items": [
                {"id": 101, "name": "Web", "sort": 1},
                {"id": 102, "name": "Data", "sort": 2},
            ],
            "sort": 1,
            "type": "session",
        },
        {
            "id": 20,
            "title": "Level",
            "items": [{"id": 201, "name": "Introductory", "sort": 1}],
            "sort": 2,
            "type": "session",
        },
    ],
    "rooms": [{"id": 1, "name": "Hall A", "sort": 1}],
}


@pytest.fixture()
def feed_document() -> dict[str, Any]:
    """Return a fresh copy of a small but complete feed document."""
    return copy.deepcopy(FEED_DOCUMENT)


def build_feed(document: dict[str, Any]) -> SessionizeData:
    """Validate *document* the way the feed client does."""
    return SessionizeData.model_validate(document)


def session_entry(session_id: str, **overrides: Any) -> dict[str, Any]:
    """Return a valid feed session with *overrides* applied."""
    entry: dict[str, Any] = {
        "id": session_id,
        "title": f"Session {session_id}",
        "description": "",
        "startsAt": "2026-06-01T11:00:00",
        "endsAt": "2026-06-01T11:30:00",
        "speakers": ["spk-ada"],
        "categoryItems": [102],
        "roomId": 1,
    }
    entry.update(overrides)
    return entry
