"""Services for user account administration."""

from django.contrib.auth import get_user_model


class AdminService:
    """
    Decide whether a new conference admin may be created.

    Creating an admin is only allowed while none exists. Once an admin has been seen the answer
    stays ``False`` for the lifetime of the service without hitting the database again.
    """

    def __init__(self) -> None:
        """Start without knowing whether an admin exists."""
        self._admin_exists = False

    def allow_admin_user_creation(self) -> bool:
        """Return ``True`` if no admin user exists yet."""
        if self._admin_exists:
            return False

        if get_user_model().objects.filter(is_admin=True).exists():
            self._admin_exists = True
            return False

        return True


admin_service = AdminService()
