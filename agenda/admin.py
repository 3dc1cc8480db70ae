"""Admin interface for the conference agenda."""

from typing import ClassVar

from django.contrib import admin

from .models import Attendee, Session, SessionAttendee, SessionSpeaker, Speaker, Track


class SessionSpeakerInline(admin.TabularInline):
    """Speakers of a session."""

    model = SessionSpeaker
    extra = 0
    autocomplete_fields = ("speaker",)


class SessionAttendeeInline(admin.TabularInline):
    """Sessions on an attendee's agenda."""

    model = SessionAttendee
    extra = 0
    autocomplete_fields = ("session",)


@admin.register(Track)
class TrackAdmin(admin.ModelAdmin):
    """Admin configuration for tracks."""

    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Speaker)
class SpeakerAdmin(admin.ModelAdmin):
    """Admin configuration for speakers."""

    list_display = ("name", "website")
    search_fields = ("name", "bio")


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    """Admin configuration for sessions."""

    list_display = ("title", "track", "start_time", "end_time")
    list_filter = ("track",)
    search_fields = ("title", "abstract")
    date_hierarchy = "start_time"
    inlines: ClassVar[list[type[admin.TabularInline]]] = [SessionSpeakerInline]


@admin.register(Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    """Admin configuration for attendees."""

    list_display = ("user_name", "first_name", "last_name", "email_address")
    search_fields = ("user_name", "first_name", "last_name")
    inlines: ClassVar[list[type[admin.TabularInline]]] = [SessionAttendeeInline]
