"""Tests for normalizing Sessionize feeds into staged records."""

import io
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from agenda.management.commands._sessionize.context import ImportContext
from agenda.management.commands._sessionize.exceptions import (
    DuplicateSpeakerError,
    DuplicateTrackError,
    MissingTrackCategoryError,
    UnknownSpeakerError,
)
from agenda.management.commands._sessionize.loader import DataLoader, SessionizeDataLoader
from agenda.management.commands._sessionize.sink import MemorySink
from agenda.management.commands._sessionize.types import ReferencePolicy
from agenda.models import MAX_SESSION_TITLE_LENGTH

from .conftest import build_feed, session_entry


COLLECT = ImportContext().evolve(reference_policy=ReferencePolicy.COLLECT)


def _normalize(document: dict[str, Any], ctx: ImportContext | None = None) -> tuple:
    sink = MemorySink()
    result = SessionizeDataLoader(ctx).normalize(build_feed(document), sink)
    return result, sink


class TestNormalizeFullFeed:
    """Verify a complete feed is staged into tracks, speakers and sessions."""

    def test_single_session_round_trip(self, feed_document: dict[str, Any]) -> None:
        """One speaker, two track items and one valid session are all staged."""
        result, sink = _normalize(feed_document)

        assert result.ok
        assert (result.speakers, result.tracks, result.sessions) == (1, 2, 1)
        assert [t.name for t in sink.tracks] == ["Web", "Data"]
        assert [s.name for s in sink.speakers] == ["Ada Lovelace"]
        assert sink.speakers[0].bio == "Writes programs for engines."

        session = sink.sessions[0]
        assert session.title == "Building APIs with Django"
        assert session.abstract == "From models to JSON responses."
        assert session.track is not None
        assert session.track.name == "Web"
        assert len(session.speaker_links) == 1
        assert session.speaker_links[0].speaker is sink.speakers[0]

    def test_session_track_is_the_staged_instance(self, feed_document: dict[str, Any]) -> None:
        """Sessions point at the same track record that was staged, never a copy."""
        feed_document["sessions"].append(session_entry("1002", categoryItems=[101]))
        _, sink = _normalize(feed_document)
        web = sink.tracks[0]
        assert all(session.track is web for session in sink.sessions)

    def test_feed_without_sessions(self, feed_document: dict[str, Any]) -> None:
        """Speakers and tracks are staged even when there are no sessions."""
        feed_document["sessions"] = []
        result, sink = _normalize(feed_document)
        assert result.ok
        assert (len(sink.speakers), len(sink.tracks), len(sink.sessions)) == (1, 2, 0)

    def test_speaker_name_from_first_and_last_name(self, feed_document: dict[str, Any]) -> None:
        """Fall back to first and last name when the full name is missing."""
        feed_document["speakers"][0]["fullName"] = None
        _, sink = _normalize(feed_document)
        assert sink.speakers[0].name == "Ada Lovelace"

    def test_missing_bio_becomes_empty(self, feed_document: dict[str, Any]) -> None:
        """Speakers without a bio get an empty one."""
        feed_document["speakers"][0]["bio"] = None
        _, sink = _normalize(feed_document)
        assert sink.speakers[0].bio == ""

    def test_surrogate_keys_are_unique(self, feed_document: dict[str, Any]) -> None:
        """Every staged record of one run has its own key."""
        _, sink = _normalize(feed_document)
        keys = [r.key for r in [*sink.tracks, *sink.speakers, *sink.sessions]]
        assert len(keys) == len(set(keys))

    def test_runs_do_not_share_state(self, feed_document: dict[str, Any]) -> None:
        """A second import starts from an empty arena."""
        loader = SessionizeDataLoader()
        first, second = MemorySink(), MemorySink()
        loader.normalize(build_feed(feed_document), first)
        loader.normalize(build_feed(feed_document), second)
        assert [t.key for t in first.tracks] == [t.key for t in second.tracks]
        assert first.tracks[0] is not second.tracks[0]


class TestSkippedSessions:
    """Verify sessions that cannot be scheduled are skipped."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"speakers": []},
            {"speakers": None},
            {"categoryItems": []},
            {"categoryItems": None},
            {"startsAt": None},
            {"endsAt": None},
            {"startsAt": "0001-01-01T00:00:00"},
            {"endsAt": "0001-01-01T00:00:00"},
        ],
    )
    def test_invalid_session_is_skipped(
        self,
        feed_document: dict[str, Any],
        overrides: dict[str, Any],
    ) -> None:
        """Sessions missing speakers, categories or times are never staged."""
        feed_document["sessions"] = [session_entry("2001", **overrides)]
        result, sink = _normalize(feed_document)
        assert result.ok
        assert result.skipped == 1
        assert sink.sessions == []


class TestTrackResolution:
    """Verify how a session's track is chosen."""

    def test_no_track_item_leaves_track_unset(self, feed_document: dict[str, Any]) -> None:
        """A session tagged only with non-track items has no track."""
        feed_document["sessions"] = [session_entry("3001", categoryItems=[201])]
        _, sink = _normalize(feed_document)
        assert sink.sessions[0].track is None

    def test_first_matching_item_wins(self, feed_document: dict[str, Any]) -> None:
        """With several track items the first one in the session's list is used."""
        feed_document["sessions"] = [session_entry("3002", categoryItems=[201, 102, 101])]
        _, sink = _normalize(feed_document)
        assert sink.sessions[0].track is not None
        assert sink.sessions[0].track.name == "Data"

    def test_first_track_category_wins(self, feed_document: dict[str, Any]) -> None:
        """Only the first category titled Track supplies tracks."""
        feed_document["categories"].append(
            {"id": 30, "title": "Track", "items": [{"id": 301, "name": "Other"}]},
        )
        _, sink = _normalize(feed_document)
        assert [t.name for t in sink.tracks] == ["Web", "Data"]

    def test_missing_track_category_aborts(self, feed_document: dict[str, Any]) -> None:
        """Without a Track category the import fails by default."""
        feed_document["categories"] = feed_document["categories"][1:]
        with pytest.raises(MissingTrackCategoryError) as exc_info:
            _normalize(feed_document)
        assert exc_info.value.result.failure is not None

    def test_missing_track_category_collected(self, feed_document: dict[str, Any]) -> None:
        """When collecting, every session is staged without a track."""
        feed_document["categories"] = feed_document["categories"][1:]
        result, sink = _normalize(feed_document, COLLECT)
        assert result.ok
        assert len(result.errors) == 1
        assert sink.tracks == []
        assert [s.track for s in sink.sessions] == [None]

    def test_duplicate_track_aborts(self, feed_document: dict[str, Any]) -> None:
        """Two track items with the same id fail the import by default."""
        feed_document["categories"][0]["items"].append({"id": 101, "name": "Web again"})
        with pytest.raises(DuplicateTrackError) as exc_info:
            _normalize(feed_document)
        assert exc_info.value.track_id == 101  # noqa: PLR2004
        assert exc_info.value.result.failure == "Track id 101 appears more than once"

    def test_duplicate_track_collected(self, feed_document: dict[str, Any]) -> None:
        """When collecting, the first track with an id wins and the clash is reported."""
        feed_document["categories"][0]["items"].append({"id": 101, "name": "Web again"})
        result, sink = _normalize(feed_document, COLLECT)
        assert result.ok
        assert result.errors == ["Track id 101 appears more than once"]
        assert [t.name for t in sink.tracks] == ["Web", "Data"]
        assert sink.sessions[0].track is sink.tracks[0]


class TestSpeakerReferences:
    """Verify handling of broken speaker references."""

    def test_unknown_speaker_aborts(self, feed_document: dict[str, Any]) -> None:
        """Sessions staged before the broken one stay staged, none after."""
        feed_document["sessions"] += [
            session_entry("4001", speakers=["spk-ghost"]),
            session_entry("4002"),
        ]
        sink = MemorySink()
        with pytest.raises(UnknownSpeakerError) as exc_info:
            SessionizeDataLoader().normalize(build_feed(feed_document), sink)

        assert exc_info.value.speaker_id == "spk-ghost"
        assert exc_info.value.session_id == "4001"
        assert exc_info.value.result.sessions == 1
        assert [s.feed_id for s in sink.sessions] == ["1001"]

    def test_unknown_speaker_collected(self, feed_document: dict[str, Any]) -> None:
        """When collecting, the broken session is dropped and the rest continues."""
        feed_document["sessions"] += [
            session_entry("4001", speakers=["spk-ada", "spk-ghost"]),
            session_entry("4002"),
        ]
        result, sink = _normalize(feed_document, COLLECT)
        assert result.ok
        assert result.errors == ["Session 4001 references unknown speaker spk-ghost"]
        assert [s.feed_id for s in sink.sessions] == ["1001", "4002"]

    def test_duplicate_speaker_aborts(self, feed_document: dict[str, Any]) -> None:
        """Two speakers with the same id fail the import by default."""
        feed_document["speakers"].append({"id": "spk-ada", "fullName": "Imposter"})
        with pytest.raises(DuplicateSpeakerError):
            _normalize(feed_document)

    def test_duplicate_speaker_collected(self, feed_document: dict[str, Any]) -> None:
        """When collecting, the first speaker with an id wins."""
        feed_document["speakers"].append({"id": "spk-ada", "fullName": "Imposter"})
        result, sink = _normalize(feed_document, COLLECT)
        assert [s.name for s in sink.speakers] == ["Ada Lovelace"]
        assert len(result.errors) == 1

    def test_repeated_speaker_is_linked_once(self, feed_document: dict[str, Any]) -> None:
        """A speaker listed twice on a session gets a single link."""
        feed_document["sessions"] = [session_entry("4003", speakers=["spk-ada", "spk-ada"])]
        _, sink = _normalize(feed_document)
        assert len(sink.sessions[0].speaker_links) == 1


class TestLoadData:
    """Verify the loader's entry points."""

    def test_load_data_is_not_supported(self) -> None:
        """Importing from a file always fails."""
        with pytest.raises(NotImplementedError):
            SessionizeDataLoader().load_data(io.BytesIO(b"{}"), MemorySink())

    def test_loader_is_a_data_loader(self) -> None:
        """The Sessionize loader implements the loader interface."""
        assert isinstance(SessionizeDataLoader(), DataLoader)


class TestTruncation:
    """Verify over-long feed values are cut to the column length."""

    @patch("agenda.management.commands._sessionize.loader.logger")
    def test_long_title_is_truncated_and_logged(
        self,
        mock_logger: MagicMock,
        feed_document: dict[str, Any],
    ) -> None:
        """Titles longer than the column are cut and the loss is logged."""
        feed_document["sessions"][0]["title"] = "x" * (MAX_SESSION_TITLE_LENGTH + 5)
        _, sink = _normalize(feed_document)

        assert len(sink.sessions[0].title) == MAX_SESSION_TITLE_LENGTH
        mock_logger.warning.assert_called_once()
        args, kwargs = mock_logger.warning.call_args
        assert args == ("sessionize_value_truncated",)
        assert kwargs["field"] == "session_title"
        assert kwargs["feed_id"] == "1001"

    @patch("agenda.management.commands._sessionize.loader.logger")
    def test_short_values_are_not_logged(
        self,
        mock_logger: MagicMock,
        feed_document: dict[str, Any],
    ) -> None:
        """Values that fit are kept as sent without a warning."""
        _normalize(feed_document)
        mock_logger.warning.assert_not_called()
