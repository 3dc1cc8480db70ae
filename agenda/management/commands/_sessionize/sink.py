"""
Staging sinks the normalizer hands its records to.

A sink only accumulates. Writing to the database is a separate, explicit step
(:meth:`DjangoSink.commit`) owned by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

import structlog
from django.db import transaction
from django.utils import timezone

from agenda.models import Session, SessionSpeaker, Speaker, Track


if TYPE_CHECKING:
    from datetime import datetime

    from agenda.management.commands._sessionize.records import (
        StagedSession,
        StagedSpeaker,
        StagedTrack,
    )


logger = structlog.get_logger(__name__)


class StagingSink(Protocol):
    """What the normalizer needs from a persistence gateway."""

    def add_speaker(self, speaker: StagedSpeaker) -> None: ...

    def add_track(self, track: StagedTrack) -> None: ...

    def add_session(self, session: StagedSession) -> None: ...


@dataclass
class MemorySink:
    """Keep staged records in lists, in staging order."""

    speakers: list[StagedSpeaker] = field(default_factory=list)
    tracks: list[StagedTrack] = field(default_factory=list)
    sessions: list[StagedSession] = field(default_factory=list)

    def add_speaker(self, speaker: StagedSpeaker) -> None:
        """Stage *speaker*."""
        self.speakers.append(speaker)

    def add_track(self, track: StagedTrack) -> None:
        """Stage *track*."""
        self.tracks.append(track)

    def add_session(self, session: StagedSession) -> None:
        """Stage *session* together with its speaker links."""
        self.sessions.append(session)

    @property
    def links(self) -> list:
        """All staged session/speaker links."""
        return [link for session in self.sessions for link in session.speaker_links]


@dataclass(frozen=True)
class CommitSummary:
    """Row counts written by :meth:`DjangoSink.commit`."""

    tracks: int = 0
    speakers: int = 0
    sessions: int = 0
    links: int = 0


class DjangoSink(MemorySink):
    """Stage records in memory and write them to the ORM on :meth:`commit`."""

    def commit(self) -> CommitSummary:
        """
        Insert every staged record in one transaction.

        Surrogate keys are mapped to the primary keys of the created rows so links and session
        tracks point at the rows written in this call.
        """
        if not (self.tracks or self.speakers or self.sessions):
            return CommitSummary()

        with transaction.atomic():
            tracks = {
                staged.key: Track.objects.create(name=staged.name) for staged in self.tracks
            }
            speakers = {
                staged.key: Speaker.objects.create(name=staged.name, bio=staged.bio)
                for staged in self.speakers
            }
            links: list[SessionSpeaker] = []
            for staged in self.sessions:
                session = Session.objects.create(
                    title=staged.title,
                    abstract=staged.abstract,
                    start_time=_aware(staged.start_time),
                    end_time=_aware(staged.end_time),
                    track=tracks[staged.track.key] if staged.track else None,
                )
                links.extend(
                    SessionSpeaker(session=session, speaker=speakers[link.speaker.key])
                    for link in staged.speaker_links
                )
            SessionSpeaker.objects.bulk_create(links)

        summary = CommitSummary(
            tracks=len(tracks),
            speakers=len(speakers),
            sessions=len(self.sessions),
            links=len(links),
        )
        logger.info(
            "sessionize_import_committed",
            tracks=summary.tracks,
            speakers=summary.speakers,
            sessions=summary.sessions,
            links=summary.links,
        )
        return summary


def _aware(value: datetime) -> datetime:
    """Interpret naive feed times in the current time zone."""
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
