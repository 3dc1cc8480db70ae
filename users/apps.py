"""AppConfig subclass for the users application."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Configuration class for the users application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"

    def ready(self) -> None:
        """Connect the auth signal handlers that log logins and store conference roles."""
        from . import signals  # noqa: F401, PLC0415

        return super().ready()
