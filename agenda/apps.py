"""Defines the configuration for the Agenda app."""

from django.apps import AppConfig


class AgendaConfig(AppConfig):
    """Configuration class for the Agenda app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "agenda"
