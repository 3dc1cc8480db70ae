"""
Conference agenda models.

Tracks group sessions, speakers present them, and attendees build a personal agenda out of them.
Session/speaker and session/attendee links are explicit join models so imports can stage them as
rows of their own.
"""

from typing import ClassVar

from django.db import models
from django.utils.translation import gettext_lazy as _


# Constants
MAX_TRACK_NAME_LENGTH = 200
MAX_SPEAKER_NAME_LENGTH = 200
MAX_SPEAKER_BIO_LENGTH = 4000
MAX_WEBSITE_LENGTH = 1000
MAX_SESSION_TITLE_LENGTH = 200
MAX_SESSION_ABSTRACT_LENGTH = 4000
MAX_ATTENDEE_NAME_LENGTH = 200
MAX_EMAIL_LENGTH = 256


class Track(models.Model):
    """A named grouping of sessions."""

    name = models.CharField(
        max_length=MAX_TRACK_NAME_LENGTH,
        help_text=_("Name of the track"),
    )

    class Meta:
        """Metadata for the Track model."""

        verbose_name = _("Track")
        verbose_name_plural = _("Tracks")
        ordering: ClassVar[list[str]] = ["name"]

    def __str__(self) -> str:
        """Return the track name."""
        return self.name


class Speaker(models.Model):
    """Represents a conference speaker."""

    name = models.CharField(
        max_length=MAX_SPEAKER_NAME_LENGTH,
        help_text=_("Full name of the speaker"),
    )
    bio = models.TextField(
        max_length=MAX_SPEAKER_BIO_LENGTH,
        blank=True,
        help_text=_("Biography of the speaker"),
    )
    website = models.URLField(
        max_length=MAX_WEBSITE_LENGTH,
        blank=True,
        default="",
        help_text=_("Personal website of the speaker"),
    )

    class Meta:
        """Metadata for the Speaker model."""

        verbose_name = _("Speaker")
        verbose_name_plural = _("Speakers")

    def __str__(self) -> str:
        """Return the speaker name."""
        return self.name


class Session(models.Model):
    """A scheduled conference session."""

    title = models.CharField(
        max_length=MAX_SESSION_TITLE_LENGTH,
        help_text=_("Title of the session"),
    )
    abstract = models.TextField(
        max_length=MAX_SESSION_ABSTRACT_LENGTH,
        blank=True,
        help_text=_("Session abstract"),
    )
    start_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("When the session starts"),
    )
    end_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("When the session ends"),
    )
    track = models.ForeignKey(
        Track,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sessions",
        help_text=_("Track the session belongs to"),
    )
    speakers = models.ManyToManyField(
        Speaker,
        through="SessionSpeaker",
        related_name="sessions",
        help_text=_("Speakers presenting this session"),
    )

    class Meta:
        """Metadata for the Session model."""

        verbose_name = _("Session")
        verbose_name_plural = _("Sessions")
        ordering: ClassVar[list[str]] = ["start_time", "title"]
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["start_time"], name="agenda_session_start_idx"),
        ]

    def __str__(self) -> str:
        """Return the session title."""
        return self.title

    @property
    def duration(self) -> int:
        """Length of the session in whole minutes, 0 when unscheduled."""
        if not self.start_time or not self.end_time:
            return 0
        return int((self.end_time - self.start_time).total_seconds() // 60)


class SessionSpeaker(models.Model):
    """Links one session to one of its speakers."""

    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        related_name="session_speakers",
    )
    speaker = models.ForeignKey(
        Speaker,
        on_delete=models.CASCADE,
        related_name="session_speakers",
    )

    class Meta:
        """Metadata for the SessionSpeaker model."""

        constraints: ClassVar[list[models.UniqueConstraint]] = [
            models.UniqueConstraint(
                fields=["session", "speaker"],
                name="unique_session_speaker",
            ),
        ]

    def __str__(self) -> str:
        """Return a readable description of the link."""
        return f"{self.speaker} @ {self.session}"


class Attendee(models.Model):
    """A registered conference attendee, keyed by the login user name."""

    first_name = models.CharField(max_length=MAX_ATTENDEE_NAME_LENGTH)
    last_name = models.CharField(max_length=MAX_ATTENDEE_NAME_LENGTH)
    user_name = models.CharField(
        max_length=MAX_ATTENDEE_NAME_LENGTH,
        unique=True,
        help_text=_("Login name of the attendee (their email address)"),
    )
    email_address = models.EmailField(
        max_length=MAX_EMAIL_LENGTH,
        blank=True,
        default="",
    )
    sessions = models.ManyToManyField(
        Session,
        through="SessionAttendee",
        related_name="attendees",
        blank=True,
    )

    class Meta:
        """Metadata for the Attendee model."""

        verbose_name = _("Attendee")
        verbose_name_plural = _("Attendees")
        ordering: ClassVar[list[str]] = ["user_name"]

    def __str__(self) -> str:
        """Return the attendee's full name."""
        return f"{self.first_name} {self.last_name}".strip()


class SessionAttendee(models.Model):
    """Links one attendee to a session on their personal agenda."""

    session = models.ForeignKey(
        Session,
        on_delete=models.CASCADE,
        related_name="session_attendees",
    )
    attendee = models.ForeignKey(
        Attendee,
        on_delete=models.CASCADE,
        related_name="session_attendees",
    )

    class Meta:
        """Metadata for the SessionAttendee model."""

        constraints: ClassVar[list[models.UniqueConstraint]] = [
            models.UniqueConstraint(
                fields=["session", "attendee"],
                name="unique_session_attendee",
            ),
        ]

    def __str__(self) -> str:
        """Return a readable description of the link."""
        return f"{self.attendee} @ {self.session}"
