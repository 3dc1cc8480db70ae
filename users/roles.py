"""
Conference roles attached to an authenticated session.

A user's roles are resolved once at login (see :mod:`users.signals`) and kept in the Django
session. Views query them through :func:`get_roles` or guard themselves with
:func:`role_required` instead of inspecting user flags directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from functools import wraps
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import structlog
from django.http import JsonResponse


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from django.contrib.auth.models import AbstractBaseUser, AnonymousUser
    from django.http import HttpRequest, HttpResponse


logger = structlog.get_logger(__name__)

#: Session key holding the serialized role values.
SESSION_ROLES_KEY = "conference_roles"


class Role(StrEnum):
    """Capabilities a conference user can hold."""

    ADMIN = "admin"
    ATTENDEE = "attendee"


@dataclass(frozen=True)
class RoleSet:
    """Immutable set of :class:`Role` values held by one authenticated session."""

    roles: frozenset[Role] = frozenset()

    def has(self, role: Role) -> bool:
        """Return ``True`` if *role* is part of this set."""
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        """Shortcut for ``has(Role.ADMIN)``."""
        return self.has(Role.ADMIN)

    @property
    def is_attendee(self) -> bool:
        """Shortcut for ``has(Role.ATTENDEE)``."""
        return self.has(Role.ATTENDEE)

    def with_role(self, role: Role) -> RoleSet:
        """Return a new set that also contains *role*."""
        return RoleSet(self.roles | {role})

    def to_session(self) -> list[str]:
        """Serialize to a JSON-friendly, sorted list of role values."""
        return sorted(role.value for role in self.roles)

    @classmethod
    def from_values(cls, values: Iterable[str]) -> RoleSet:
        """Build a set from stored values, ignoring the ones that are no longer roles."""
        known = {role.value for role in Role}
        return cls(frozenset(Role(value) for value in values if value in known))


def resolve_roles(user: AbstractBaseUser | AnonymousUser) -> RoleSet:
    """
    Compute the roles of *user* from the database.

    Admins are flagged on the user row; attendees are users with a registered
    :class:`~agenda.models.Attendee` whose user name is their email.
    """
    from agenda.models import Attendee  # noqa: PLC0415

    if not user.is_authenticated:
        return RoleSet()

    roles: set[Role] = set()
    if getattr(user, "is_admin", False):
        roles.add(Role.ADMIN)
    email = getattr(user, "email", "")
    if email and Attendee.objects.filter(user_name__iexact=email).exists():
        roles.add(Role.ATTENDEE)
    return RoleSet(frozenset(roles))


def store_roles(request: HttpRequest, roles: RoleSet) -> None:
    """Persist *roles* in the request's session."""
    request.session[SESSION_ROLES_KEY] = roles.to_session()


def get_roles(request: HttpRequest) -> RoleSet:
    """
    Return the roles of the session behind *request*.

    Anonymous requests hold no roles. Sessions created before roles were stored are resolved
    lazily and stored on first access.
    """
    if not request.user.is_authenticated:
        return RoleSet()

    stored = request.session.get(SESSION_ROLES_KEY)
    if stored is None:
        roles = resolve_roles(request.user)
        store_roles(request, roles)
        return roles
    return RoleSet.from_values(stored)


def grant_role(request: HttpRequest, role: Role) -> RoleSet:
    """Add *role* to the session behind *request* and return the updated set."""
    roles = get_roles(request).with_role(role)
    store_roles(request, roles)
    logger.info("role_granted", user_id=request.user.pk, role=role.value)
    return roles


def role_required(
    role: Role,
) -> Callable[[Callable[..., HttpResponse]], Callable[..., HttpResponse]]:
    """
    Guard a view so that only sessions holding *role* can call it.

    Anonymous requests get a 401 JSON response, authenticated ones lacking the role a 403.
    """

    def decorator(view: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
        @wraps(view)
        def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
            if not request.user.is_authenticated:
                return JsonResponse(
                    {"detail": "Authentication required."},
                    status=HTTPStatus.UNAUTHORIZED,
                )
            if not get_roles(request).has(role):
                logger.warning("role_denied", user_id=request.user.pk, role=role.value)
                return JsonResponse(
                    {"detail": f"The '{role.value}' role is required."},
                    status=HTTPStatus.FORBIDDEN,
                )
            return view(request, *args, **kwargs)

        return wrapper

    return decorator
