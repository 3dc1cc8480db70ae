"""
JSON shapes returned by the agenda API.

Each ``map_*`` function turns one model instance into a plain ``dict`` ready for
:class:`~django.http.JsonResponse`. Callers are expected to prefetch the relations used here.
"""

from typing import Any

from .models import Attendee, Session, Speaker


def _isoformat(value: Any) -> str | None:
    return value.isoformat() if value else None


def map_session_response(session: Session) -> dict[str, Any]:
    """Session with its speakers and track."""
    return {
        "id": session.pk,
        "title": session.title,
        "abstract": session.abstract,
        "start_time": _isoformat(session.start_time),
        "end_time": _isoformat(session.end_time),
        "duration": session.duration,
        "track_id": session.track_id,
        "track": {
            "id": session.track_id or 0,
            "name": session.track.name if session.track else None,
        },
        "speakers": [
            {"id": link.speaker_id, "name": link.speaker.name}
            for link in session.session_speakers.all()
        ],
    }


def map_speaker_response(speaker: Speaker) -> dict[str, Any]:
    """Speaker with the titles of their sessions; the name is trimmed."""
    return {
        "id": speaker.pk,
        "name": speaker.name.strip(),
        "bio": speaker.bio,
        "website": speaker.website,
        "sessions": [
            {"id": link.session_id, "title": link.session.title}
            for link in speaker.session_speakers.all()
        ],
    }


def map_attendee_response(attendee: Attendee) -> dict[str, Any]:
    """Attendee with the sessions on their agenda."""
    return {
        "id": attendee.pk,
        "first_name": attendee.first_name,
        "last_name": attendee.last_name,
        "user_name": attendee.user_name,
        "email_address": attendee.email_address,
        "sessions": [
            {
                "id": link.session_id,
                "title": link.session.title,
                "start_time": _isoformat(link.session.start_time),
                "end_time": _isoformat(link.session.end_time),
            }
            for link in attendee.session_attendees.all()
        ],
    }


def map_search_result(value: Session | Speaker) -> dict[str, Any]:
    """Tag a session or speaker with its kind for the search endpoint."""
    if isinstance(value, Session):
        return {"type": "Session", "session": map_session_response(value)}
    return {"type": "Speaker", "speaker": map_speaker_response(value)}
