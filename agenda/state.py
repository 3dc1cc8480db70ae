"""
Per-request view of who is browsing and which sessions they see.

One :class:`AppState` lives on ``request.app_state`` for the duration of a request (see
:class:`agenda.middleware.AppStateMiddleware`). Components that render part of a page can
subscribe to it and re-read the state whenever a mutator runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from users.roles import Role, RoleSet


if TYPE_CHECKING:
    from collections.abc import Callable


type Listener = Callable[[], None]


@dataclass
class AppState:
    """Mutable UI state with change notification."""

    user_name: str = ""
    roles: RoleSet = field(default_factory=RoleSet)
    all_sessions: list[dict[str, Any]] = field(default_factory=list)
    user_sessions: list[dict[str, Any]] = field(default_factory=list)
    _listeners: list[Listener] = field(default_factory=list, repr=False)

    @property
    def is_logged_in(self) -> bool:
        """``True`` once a non-empty user name has been set."""
        return bool(self.user_name)

    @property
    def is_admin(self) -> bool:
        """Shortcut for the admin role."""
        return self.roles.has(Role.ADMIN)

    @property
    def is_attendee(self) -> bool:
        """Shortcut for the attendee role."""
        return self.roles.has(Role.ATTENDEE)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every change; return a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_user_name(self, name: str | None) -> None:
        """Set the user name; empty names are ignored."""
        if not name:
            return
        self.user_name = name
        self._notify()

    def set_roles(self, roles: RoleSet) -> None:
        """Replace the role set."""
        self.roles = roles
        self._notify()

    def set_all_sessions(self, sessions: list[dict[str, Any]]) -> None:
        """Replace the sessions of the conference."""
        self.all_sessions = sessions
        self._notify()

    def set_user_sessions(self, sessions: list[dict[str, Any]]) -> None:
        """Replace the sessions on the user's agenda."""
        self.user_sessions = sessions
        self._notify()

    def add_session_to_user(self, session_id: int) -> None:
        """Copy session *session_id* from ``all_sessions`` to the user's sessions."""
        session = next((s for s in self.all_sessions if s["id"] == session_id), None)
        if session is not None and session not in self.user_sessions:
            self.user_sessions.append(session)
        self._notify()

    def remove_session_from_user(self, session_id: int) -> None:
        """Drop session *session_id* from the user's agenda, if present."""
        self.user_sessions = [s for s in self.user_sessions if s["id"] != session_id]
        self._notify()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the identity part of the state."""
        return {
            "user_name": self.user_name,
            "is_logged_in": self.is_logged_in,
            "is_admin": self.is_admin,
            "is_attendee": self.is_attendee,
            "roles": self.roles.to_session(),
        }

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
