"""
JSON API for the conference agenda.

Reads are public; deleting sessions needs the admin role and editing a personal agenda needs the
attendee role (see :mod:`users.roles`).
"""

import json
from http import HTTPStatus
from typing import Any

import structlog
from django.db import IntegrityError
from django.db.models import Prefetch, Q, QuerySet
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from users.roles import Role, get_roles, grant_role, role_required

from .forms import AttendeeForm
from .models import Attendee, Session, SessionAttendee, SessionSpeaker, Speaker
from .responses import (
    map_attendee_response,
    map_search_result,
    map_session_response,
    map_speaker_response,
)


logger = structlog.get_logger(__name__)


def _sessions() -> QuerySet[Session]:
    return Session.objects.select_related("track").prefetch_related(
        Prefetch(
            "session_speakers",
            queryset=SessionSpeaker.objects.select_related("speaker"),
        ),
    )


def _speakers() -> QuerySet[Speaker]:
    return Speaker.objects.prefetch_related(
        Prefetch(
            "session_speakers",
            queryset=SessionSpeaker.objects.select_related("session"),
        ),
    )


def _attendees() -> QuerySet[Attendee]:
    return Attendee.objects.prefetch_related(
        Prefetch(
            "session_attendees",
            queryset=SessionAttendee.objects.select_related("session"),
        ),
    )


def _get_attendee(username: str) -> Attendee:
    return get_object_or_404(_attendees(), user_name__iexact=username)


def _error(detail: Any, status: HTTPStatus) -> JsonResponse:
    return JsonResponse({"detail": detail}, status=status)


def _json_body(request: HttpRequest) -> dict[str, Any] | None:
    """Decode a JSON object body, or return ``None`` if it is not one."""
    try:
        payload = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _owns_agenda(request: HttpRequest, username: str) -> bool:
    email = getattr(request.user, "email", "")
    return get_roles(request).is_admin or email.lower() == username.lower()


# ------------------------------------------------------------------
# Speakers
# ------------------------------------------------------------------


@require_GET
def speaker_list(_: HttpRequest) -> JsonResponse:
    """Return all speakers ordered by name."""
    speakers = sorted(_speakers(), key=lambda speaker: speaker.name.strip().lower())
    return JsonResponse([map_speaker_response(s) for s in speakers], safe=False)


@require_GET
def speaker_detail(_: HttpRequest, speaker_id: int) -> JsonResponse:
    """Return one speaker."""
    speaker = get_object_or_404(_speakers(), pk=speaker_id)
    return JsonResponse(map_speaker_response(speaker))


# ------------------------------------------------------------------
# Sessions
# ------------------------------------------------------------------


@require_GET
def session_list(_: HttpRequest) -> JsonResponse:
    """Return all sessions with their speakers and track."""
    return JsonResponse([map_session_response(s) for s in _sessions()], safe=False)


@require_http_methods(["GET", "DELETE"])
def session_detail(request: HttpRequest, session_id: int) -> HttpResponse:
    """Return one session, or delete it for admins."""
    if request.method == "DELETE":
        return _delete_session(request, session_id)
    session = get_object_or_404(_sessions(), pk=session_id)
    return JsonResponse(map_session_response(session))


@role_required(Role.ADMIN)
def _delete_session(request: HttpRequest, session_id: int) -> HttpResponse:
    session = get_object_or_404(Session, pk=session_id)
    session.delete()
    logger.info("session_deleted", session_id=session_id, user_id=request.user.pk)
    return HttpResponse(status=HTTPStatus.NO_CONTENT)


# ------------------------------------------------------------------
# Attendees
# ------------------------------------------------------------------


@require_POST
def attendee_create(request: HttpRequest) -> JsonResponse:
    """
    Register an attendee.

    Responds 409 when the user name is taken and 400 when the payload is invalid. When the new
    attendee is the caller, the caller's session gains the attendee role.
    """
    if not request.user.is_authenticated:
        return _error("Authentication required.", HTTPStatus.UNAUTHORIZED)

    payload = _json_body(request)
    if payload is None:
        return _error("Request body must be a JSON object.", HTTPStatus.BAD_REQUEST)

    user_name = str(payload.get("user_name", "")).strip()
    if user_name and Attendee.objects.filter(user_name__iexact=user_name).exists():
        return _error(f"Attendee '{user_name}' already exists.", HTTPStatus.CONFLICT)

    form = AttendeeForm(payload)
    if not form.is_valid():
        return _error(form.errors.get_json_data(), HTTPStatus.BAD_REQUEST)

    try:
        attendee = form.save()
    except IntegrityError:
        return _error(f"Attendee '{user_name}' already exists.", HTTPStatus.CONFLICT)

    logger.info("attendee_created", attendee_id=attendee.pk, user_id=request.user.pk)
    if attendee.user_name == getattr(request.user, "email", "").lower():
        grant_role(request, Role.ATTENDEE)

    return JsonResponse(
        map_attendee_response(_get_attendee(attendee.user_name)),
        status=HTTPStatus.CREATED,
    )


@require_GET
def attendee_detail(_: HttpRequest, username: str) -> JsonResponse:
    """Return one attendee with their sessions."""
    return JsonResponse(map_attendee_response(_get_attendee(username)))


@require_GET
def attendee_sessions(_: HttpRequest, username: str) -> JsonResponse:
    """Return the sessions on an attendee's agenda."""
    attendee = _get_attendee(username)
    sessions = _sessions().filter(session_attendees__attendee=attendee)
    return JsonResponse([map_session_response(s) for s in sessions], safe=False)


@require_http_methods(["POST", "DELETE"])
@role_required(Role.ATTENDEE)
def attendee_session(request: HttpRequest, username: str, session_id: int) -> HttpResponse:
    """Add a session to, or remove it from, an attendee's agenda."""
    if not _owns_agenda(request, username):
        return _error("You can only change your own agenda.", HTTPStatus.FORBIDDEN)

    attendee = _get_attendee(username)
    session = get_object_or_404(Session, pk=session_id)

    if request.method == "DELETE":
        deleted, _ = SessionAttendee.objects.filter(attendee=attendee, session=session).delete()
        if not deleted:
            return _error("Session is not on this agenda.", HTTPStatus.NOT_FOUND)
        logger.info("agenda_session_removed", attendee_id=attendee.pk, session_id=session.pk)
        return HttpResponse(status=HTTPStatus.NO_CONTENT)

    SessionAttendee.objects.get_or_create(attendee=attendee, session=session)
    logger.info("agenda_session_added", attendee_id=attendee.pk, session_id=session.pk)
    return JsonResponse(map_attendee_response(_get_attendee(username)))


# ------------------------------------------------------------------
# Search and identity
# ------------------------------------------------------------------


@require_POST
def search(request: HttpRequest) -> JsonResponse:
    """Find sessions and speakers whose text contains ``query`` (case-insensitive)."""
    payload = _json_body(request)
    if payload is None:
        return _error("Request body must be a JSON object.", HTTPStatus.BAD_REQUEST)

    query = str(payload.get("query", "")).strip()
    if not query:
        return JsonResponse([], safe=False)

    sessions = _sessions().filter(Q(title__icontains=query) | Q(abstract__icontains=query))
    speakers = _speakers().filter(Q(name__icontains=query) | Q(bio__icontains=query))
    results = [map_search_result(s) for s in sessions]
    results.extend(map_search_result(s) for s in speakers)
    return JsonResponse(results, safe=False)


@require_GET
def me(request: HttpRequest) -> JsonResponse:
    """Return the identity part of the current app state."""
    return JsonResponse(request.app_state.to_dict())  # type: ignore[attr-defined]
