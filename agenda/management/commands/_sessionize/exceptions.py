"""Exceptions raised by the Sessionize importer."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from agenda.management.commands._sessionize.records import ImportResult


class SessionizeImportError(Exception):
    """Base class for every import failure."""


class FeedError(SessionizeImportError):
    """The feed could not be downloaded or does not match the schema."""

    def __init__(self, url: str, reason: str) -> None:
        """Record the feed *url* and why it could not be used."""
        self.url = url
        self.reason = reason
        super().__init__(f"Cannot load Sessionize feed from {url}: {reason}")


class ReferenceIntegrityError(SessionizeImportError):
    """The feed references something it does not define; the import was aborted."""

    def __init__(self, message: str, result: ImportResult) -> None:
        """Keep the partial *result* of the aborted run."""
        self.result = result
        super().__init__(message)


class MissingTrackCategoryError(ReferenceIntegrityError):
    """The feed has no category titled ``"Track"``."""


class UnknownSpeakerError(ReferenceIntegrityError):
    """A session references a speaker id absent from the feed's speakers."""

    def __init__(self, session_id: str, speaker_id: str, result: ImportResult) -> None:
        """Record which session referenced which unknown speaker."""
        self.session_id = session_id
        self.speaker_id = speaker_id
        super().__init__(
            f"Session {session_id} references unknown speaker {speaker_id}",
            result,
        )


class DuplicateSpeakerError(ReferenceIntegrityError):
    """Two feed speakers share the same id."""

    def __init__(self, speaker_id: str, result: ImportResult) -> None:
        """Record the duplicated speaker id."""
        self.speaker_id = speaker_id
        super().__init__(f"Speaker id {speaker_id} appears more than once", result)


class DuplicateTrackError(ReferenceIntegrityError):
    """Two items of the ``"Track"`` category share the same id."""

    def __init__(self, track_id: int, result: ImportResult) -> None:
        """Record the duplicated track id."""
        self.track_id = track_id
        super().__init__(f"Track id {track_id} appears more than once", result)
