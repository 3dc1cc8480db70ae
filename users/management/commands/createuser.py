"""Management command to create a user with email."""

from typing import Any

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError, CommandParser

from users.models import CustomUser, InvalidEmailError
from users.services import admin_service


class Command(BaseCommand):
    """
    Django command to create a regular user or the first conference admin.

    Users are created without a password, following the application's passwordless login.
    Only one bootstrap admin can be created this way: once an admin exists, ``--admin`` is refused.
    """

    help = "Create a user with the specified email address"

    def add_arguments(self, parser: CommandParser) -> None:
        """Add command line arguments."""
        parser.add_argument(
            "--email",
            type=str,
            required=True,
            help="Email address for the new user",
        )
        parser.add_argument(
            "--admin",
            action="store_true",
            help="Flag the user as conference admin (only while no admin exists)",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: ARG002
        """Create the user, refusing admin creation when an admin already exists."""
        User = get_user_model()  # noqa: N806
        email = options["email"]
        make_admin = options.get("admin", False)

        if make_admin and not admin_service.allow_admin_user_creation():
            msg = "An admin user already exists; refusing to create another one."
            self.stderr.write(self.style.ERROR(msg))
            raise CommandError(msg)

        try:
            user: CustomUser = User.objects.create_user(
                email=email,
                is_active=True,
                is_admin=make_admin,
            )
            kind = "admin" if make_admin else "user"
            self.stdout.write(
                self.style.SUCCESS(
                    f"Successfully created {kind} with email: {user.email}",
                ),
            )
        except InvalidEmailError:
            self.stdout.write(
                self.style.ERROR(f"Invalid email format: {email}"),
            )
            raise
        except ValidationError as e:
            self.stdout.write(
                self.style.ERROR(f"Validation error: {e}"),
            )
            raise
