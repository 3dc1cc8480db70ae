"""Tests for the createuser management command."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from model_bakery import baker

from users.models import CustomUser, InvalidEmailError


@pytest.mark.django_db
class TestCreateUserCommand:
    """Tests for the createuser management command."""

    def test_create_user_success(self) -> None:
        """Create an active user with an unusable password from the given email."""
        call_command("createuser", email="cmd@example.com", stdout=StringIO())
        assert CustomUser.objects.filter(email="cmd@example.com").exists()
        user = CustomUser.objects.get(email="cmd@example.com")
        assert user.is_active is True
        assert user.is_admin is False
        assert not user.has_usable_password()

    def test_create_user_invalid_email(self) -> None:
        """Raise InvalidEmailError when an empty email is provided."""
        with pytest.raises(InvalidEmailError):
            call_command("createuser", email="", stdout=StringIO())

    def test_create_user_duplicate_email(self) -> None:
        """Raise InvalidEmailError when the email is already in use."""
        call_command("createuser", email="dup@example.com", stdout=StringIO())
        with pytest.raises(InvalidEmailError):
            call_command("createuser", email="dup@example.com", stdout=StringIO())


@pytest.mark.django_db
class TestCreateAdminCommand:
    """Tests for bootstrapping the first conference admin."""

    def test_first_admin_is_created(self) -> None:
        """Create an admin while none exists yet."""
        out = StringIO()
        call_command("createuser", email="boss@example.com", admin=True, stdout=out)
        assert CustomUser.objects.get(email="boss@example.com").is_admin is True
        assert "Successfully created admin" in out.getvalue()

    def test_second_admin_is_refused(self) -> None:
        """Refuse --admin once an admin exists, and create nobody."""
        baker.make(CustomUser, email="first@example.com", is_admin=True)
        err = StringIO()
        with pytest.raises(CommandError, match="already exists"):
            call_command("createuser", email="second@example.com", admin=True, stderr=err)
        assert not CustomUser.objects.filter(email="second@example.com").exists()
        assert "refusing" in err.getvalue()

    def test_regular_user_allowed_when_admin_exists(self) -> None:
        """Plain users can always be created."""
        baker.make(CustomUser, email="first@example.com", is_admin=True)
        call_command("createuser", email="plain@example.com", stdout=StringIO())
        assert CustomUser.objects.filter(email="plain@example.com", is_admin=False).exists()
