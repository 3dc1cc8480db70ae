"""Middleware attaching the per-request :class:`~agenda.state.AppState`."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from users.roles import get_roles

from .state import AppState


class AppStateMiddleware:
    """
    Build a fresh :class:`AppState` for every request.

    Must run after the session and authentication middleware.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Store the next handler in the chain."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Attach ``request.app_state`` and continue."""
        state = AppState()
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            state.set_user_name(user.get_username())
            state.set_roles(get_roles(request))
        request.app_state = state  # type: ignore[attr-defined]
        return self.get_response(request)
