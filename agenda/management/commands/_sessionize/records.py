"""
Staged records produced by the normalizer, and the bookkeeping of one import run.

Records are plain dataclasses, independent of the ORM, so the normalizer can be exercised against
any sink. Each record carries a surrogate ``key`` assigned by the :class:`ImportArena` of the run
that created it.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime


@dataclass
class StagedTrack:
    """A track built from one item of the feed's ``"Track"`` category."""

    key: int
    feed_id: int
    name: str


@dataclass
class StagedSpeaker:
    """A speaker built from one feed speaker."""

    key: int
    feed_id: str
    name: str
    bio: str = ""


@dataclass
class StagedSessionSpeaker:
    """Join of one staged session to one staged speaker."""

    session: StagedSession
    speaker: StagedSpeaker


@dataclass
class StagedSession:
    """A session that passed validation, with its resolved track and speaker links."""

    key: int
    feed_id: str
    title: str
    start_time: datetime
    end_time: datetime
    abstract: str = ""
    track: StagedTrack | None = None
    speaker_links: list[StagedSessionSpeaker] = field(default_factory=list)

    def link_speaker(self, speaker: StagedSpeaker) -> StagedSessionSpeaker:
        """Append and return a link to *speaker*."""
        link = StagedSessionSpeaker(session=self, speaker=speaker)
        self.speaker_links.append(link)
        return link


@dataclass
class ImportArena:
    """
    External-id to record maps of a single import call.

    Surrogate keys are handed out from one counter, so they are unique across record kinds within
    the run. The arena is dropped together with the call that created it.
    """

    speakers: dict[str, StagedSpeaker] = field(default_factory=dict)
    tracks: dict[int, StagedTrack] = field(default_factory=dict)
    _keys: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    def next_key(self) -> int:
        """Return the next surrogate key."""
        return next(self._keys)


@dataclass
class ImportResult:
    """Outcome of one import run."""

    speakers: int = 0
    tracks: int = 0
    sessions: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)
    failure: str | None = None

    @property
    def ok(self) -> bool:
        """``True`` unless the import was aborted."""
        return self.failure is None

    def summary(self) -> str:
        """One-line human summary."""
        return (
            f"{self.sessions} sessions, {self.speakers} speakers, {self.tracks} tracks staged; "
            f"{self.skipped} sessions skipped, {len(self.errors)} reference errors"
        )
