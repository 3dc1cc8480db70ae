"""
Turn a Sessionize feed into staged tracks, speakers and sessions.

:class:`SessionizeDataLoader` is stateless between calls: every run gets a fresh
:class:`~.records.ImportArena` mapping feed ids to staged records, and the arena is discarded
once the records are in the sink.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO, TYPE_CHECKING

import structlog

from agenda.management.commands._sessionize.client import fetch_feed
from agenda.management.commands._sessionize.context import ImportContext
from agenda.management.commands._sessionize.exceptions import (
    DuplicateSpeakerError,
    DuplicateTrackError,
    MissingTrackCategoryError,
    UnknownSpeakerError,
)
from agenda.management.commands._sessionize.records import (
    ImportArena,
    ImportResult,
    StagedSession,
    StagedSpeaker,
    StagedTrack,
)
from agenda.management.commands._sessionize.schema import is_unset
from agenda.management.commands._sessionize.types import ReferencePolicy, VerbosityLevel
from agenda.models import (
    MAX_SESSION_TITLE_LENGTH,
    MAX_SPEAKER_NAME_LENGTH,
    MAX_TRACK_NAME_LENGTH,
)


if TYPE_CHECKING:
    import httpx

    from agenda.management.commands._sessionize.schema import (
        SessionizeData,
        SessionizeItem,
        SessionizeSession,
    )
    from agenda.management.commands._sessionize.sink import StagingSink


logger = structlog.get_logger(__name__)

#: Title of the feed category whose items are the conference tracks.
TRACK_CATEGORY_TITLE = "Track"


class DataLoader(ABC):
    """Source of conference data that stages what it reads into a sink."""

    @abstractmethod
    def load_data(self, file_obj: IO[bytes], sink: StagingSink) -> ImportResult:
        """Import from an uploaded file or stream."""

    @abstractmethod
    def load_sessionize_data(self, url: str, sink: StagingSink) -> ImportResult:
        """Import from a Sessionize feed URL."""


class SessionizeDataLoader(DataLoader):
    """Normalize the Sessionize "All data" feed into the agenda's entity graph."""

    def __init__(
        self,
        ctx: ImportContext | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Use *ctx* for logging and policies; *http_client* overrides the transport."""
        self.ctx = ctx or ImportContext()
        self.http_client = http_client

    def load_data(self, file_obj: IO[bytes], sink: StagingSink) -> ImportResult:
        """Importing from a file is not supported for Sessionize feeds."""
        del file_obj, sink
        msg = "Importing Sessionize data from a file is not supported; use a feed URL."
        raise NotImplementedError(msg)

    def load_sessionize_data(self, url: str, sink: StagingSink) -> ImportResult:
        """Fetch the feed at *url* and stage it into *sink*."""
        feed = fetch_feed(url, self.ctx, client=self.http_client)
        return self.normalize(feed, sink)

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize(self, feed: SessionizeData, sink: StagingSink) -> ImportResult:
        """
        Stage *feed* into *sink* and report what happened.

        Tracks and speakers are staged unconditionally. Sessions without speakers, without
        categories or without both times are skipped. Broken references follow
        ``ctx.reference_policy``: under ``ABORT`` the matching
        :class:`~.exceptions.ReferenceIntegrityError` is raised with the partial result and
        whatever was staged so far stays in the sink.
        """
        arena = ImportArena()
        result = ImportResult()

        candidates = self._track_candidates(feed, result)
        self._stage_tracks(candidates, arena, sink, result)
        self._stage_speakers(feed, arena, sink, result)

        for feed_session in feed.sessions:
            if not self._is_schedulable(feed_session):
                result.skipped += 1
                self.ctx.log(
                    f"Skipping session {feed_session.id} ({feed_session.title}): "
                    "missing speakers, categories or times",
                    VerbosityLevel.DEBUG,
                    "WARNING",
                )
                continue

            session = self._build_session(feed_session, arena, result)
            if session is None:
                result.skipped += 1
                continue

            sink.add_session(session)
            result.sessions += 1
            self.ctx.log(
                f"Staged session: {session.title}",
                VerbosityLevel.DETAILED,
            )

        logger.info(
            "sessionize_feed_normalized",
            sessions=result.sessions,
            speakers=result.speakers,
            tracks=result.tracks,
            skipped=result.skipped,
            errors=len(result.errors),
        )
        return result

    def _track_candidates(
        self,
        feed: SessionizeData,
        result: ImportResult,
    ) -> list[SessionizeItem]:
        """Return the items of the ``"Track"`` category."""
        for category in feed.categories:
            if category.title == TRACK_CATEGORY_TITLE:
                return list(category.items)

        message = f"The feed has no '{TRACK_CATEGORY_TITLE}' category"
        self._reference_failure(message, result)
        return []

    def _stage_tracks(
        self,
        candidates: list[SessionizeItem],
        arena: ImportArena,
        sink: StagingSink,
        result: ImportResult,
    ) -> None:
        for item in candidates:
            if item.id in arena.tracks:
                # Under COLLECT the first track with an id wins
                self._reference_failure(
                    f"Track id {item.id} appears more than once",
                    result,
                    error=DuplicateTrackError(item.id, result),
                )
                continue
            track = StagedTrack(
                key=arena.next_key(),
                feed_id=item.id,
                name=_truncate(item.name, MAX_TRACK_NAME_LENGTH, "track_name", item.id),
            )
            arena.tracks[item.id] = track
            sink.add_track(track)
            result.tracks += 1

    def _stage_speakers(
        self,
        feed: SessionizeData,
        arena: ImportArena,
        sink: StagingSink,
        result: ImportResult,
    ) -> None:
        for feed_speaker in feed.speakers:
            if feed_speaker.id in arena.speakers:
                # Under COLLECT the first speaker with an id wins
                self._reference_failure(
                    f"Speaker id {feed_speaker.id} appears more than once",
                    result,
                    error=DuplicateSpeakerError(feed_speaker.id, result),
                )
                continue
            speaker = StagedSpeaker(
                key=arena.next_key(),
                feed_id=feed_speaker.id,
                name=_truncate(
                    feed_speaker.display_name,
                    MAX_SPEAKER_NAME_LENGTH,
                    "speaker_name",
                    feed_speaker.id,
                ),
                bio=feed_speaker.bio or "",
            )
            arena.speakers[feed_speaker.id] = speaker
            sink.add_speaker(speaker)
            result.speakers += 1

    @staticmethod
    def _is_schedulable(feed_session: SessionizeSession) -> bool:
        """Return ``True`` if the session has speakers, categories and both times."""
        return bool(
            feed_session.speakers
            and feed_session.category_items
            and not is_unset(feed_session.starts_at)
            and not is_unset(feed_session.ends_at),
        )

    def _build_session(
        self,
        feed_session: SessionizeSession,
        arena: ImportArena,
        result: ImportResult,
    ) -> StagedSession | None:
        """
        Build a staged session linked to its track and speakers.

        Returns ``None`` when a speaker reference is unknown and the policy is ``COLLECT``.
        """
        # Validated by _is_schedulable
        assert feed_session.starts_at is not None  # noqa: S101
        assert feed_session.ends_at is not None  # noqa: S101

        missing = [sid for sid in feed_session.speakers or [] if sid not in arena.speakers]
        if missing:
            self._reference_failure(
                f"Session {feed_session.id} references unknown speaker {missing[0]}",
                result,
                error=UnknownSpeakerError(feed_session.id, missing[0], result),
            )
            return None

        session = StagedSession(
            key=arena.next_key(),
            feed_id=feed_session.id,
            title=_truncate(
                feed_session.title,
                MAX_SESSION_TITLE_LENGTH,
                "session_title",
                feed_session.id,
            ),
            start_time=feed_session.starts_at,
            end_time=feed_session.ends_at,
            abstract=feed_session.description or "",
            track=self._resolve_track(feed_session, arena),
        )
        seen: set[str] = set()
        for speaker_id in feed_session.speakers or []:
            if speaker_id in seen:
                continue
            seen.add(speaker_id)
            session.link_speaker(arena.speakers[speaker_id])
        return session

    @staticmethod
    def _resolve_track(
        feed_session: SessionizeSession,
        arena: ImportArena,
    ) -> StagedTrack | None:
        """Return the track of the first category item that is a track, if any."""
        for item_id in feed_session.category_items or []:
            track = arena.tracks.get(item_id)
            if track is not None:
                return track
        return None

    def _reference_failure(
        self,
        message: str,
        result: ImportResult,
        error: Exception | None = None,
    ) -> None:
        """Abort or record a broken reference according to the context's policy."""
        if self.ctx.reference_policy is ReferencePolicy.ABORT:
            result.failure = message
            logger.error("sessionize_import_aborted", reason=message)
            raise error or MissingTrackCategoryError(message, result)

        result.errors.append(message)
        logger.warning("sessionize_reference_error", reason=message)
        self.ctx.log(message, VerbosityLevel.NORMAL, "WARNING")


def _truncate(value: str, limit: int, field: str, feed_id: str | int) -> str:
    """Cut *value* to the column length, logging when text is lost."""
    if len(value) <= limit:
        return value
    logger.warning(
        "sessionize_value_truncated",
        field=field,
        feed_id=feed_id,
        length=len(value),
        limit=limit,
    )
    return value[:limit]
