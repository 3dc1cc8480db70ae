"""Admin interface for users."""

from typing import ClassVar

from allauth.account.models import EmailAddress
from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth.forms import UserChangeForm
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


class CustomUserCreationForm(forms.ModelForm):
    """Create users without a password; they log in with an email code."""

    class Meta:
        """Form metadata."""

        model = CustomUser
        fields = ("email", "first_name", "last_name", "is_admin", "is_active")


class CustomUserChangeForm(UserChangeForm):
    """Edit form bound to the email-based user model."""

    class Meta:
        """Form metadata."""

        model = CustomUser
        fields = "__all__"


class EmailAddressInline(admin.TabularInline):
    """Inline admin interface for EmailAddress objects."""

    model = EmailAddress
    extra = 0
    readonly_fields: ClassVar[list[str]] = ["email", "verified", "primary"]
    can_delete = False
    verbose_name = _("Email Address")
    verbose_name_plural = _("Email Addresses")
    fields = ("email", "verified", "primary")

    def has_add_permission(self, request: HttpRequest, obj: CustomUser | None = None) -> bool:  # noqa: ARG002
        """Prevent adding email addresses directly through admin."""
        return False


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    """Admin configuration for the CustomUser model using UserAdmin."""

    form = CustomUserChangeForm
    add_form = CustomUserCreationForm
    username_field = "email"

    list_display = (
        "email",
        "first_name",
        "last_name",
        "is_admin",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = ("is_admin", "is_staff", "is_superuser", "is_active")
    search_fields = ("email", "first_name", "last_name")
    ordering = ("-date_joined",)
    inlines: ClassVar[list[type[admin.TabularInline]]] = [EmailAddressInline]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("first_name", "last_name")}),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_admin",
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
                "description": _(
                    "Conference admins manage sessions. Only staff can log in to this site.",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "first_name", "last_name", "is_admin", "is_active"),
            },
        ),
    )
