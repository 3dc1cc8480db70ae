"""Shared test fixtures for the users app."""

from collections.abc import Iterator
from typing import Any

import pytest
from django.contrib.auth import get_user_model

from users.services import admin_service


@pytest.fixture()
def user_model() -> type[Any]:
    """Return the user model being used by the application."""
    return get_user_model()


@pytest.fixture(autouse=True)
def _reset_admin_service() -> Iterator[None]:
    """Forget any admin seen by the module-level admin service in earlier tests."""
    admin_service._admin_exists = False  # noqa: SLF001
    yield
    admin_service._admin_exists = False  # noqa: SLF001
