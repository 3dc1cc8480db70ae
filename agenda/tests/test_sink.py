"""Tests for writing staged records to the database."""

from typing import Any

import pytest
from django.utils import timezone

from agenda.management.commands._sessionize.loader import SessionizeDataLoader
from agenda.management.commands._sessionize.sink import CommitSummary, DjangoSink, MemorySink
from agenda.models import Session, SessionSpeaker, Speaker, Track

from .conftest import build_feed, session_entry


def _stage(document: dict[str, Any]) -> DjangoSink:
    sink = DjangoSink()
    SessionizeDataLoader().normalize(build_feed(document), sink)
    return sink


class TestMemorySink:
    """Verify the in-memory sink only accumulates."""

    def test_links_follow_sessions(self, feed_document: dict[str, Any]) -> None:
        """Links are read from the staged sessions."""
        sink = MemorySink()
        SessionizeDataLoader().normalize(build_feed(feed_document), sink)
        assert [link.speaker.name for link in sink.links] == ["Ada Lovelace"]


@pytest.mark.django_db
class TestDjangoSink:
    """Verify committing staged records to the ORM."""

    def test_staging_writes_nothing(self, feed_document: dict[str, Any]) -> None:
        """No rows exist until commit is called."""
        _stage(feed_document)
        assert not Session.objects.exists()
        assert not Speaker.objects.exists()

    def test_commit_writes_rows_and_links(self, feed_document: dict[str, Any]) -> None:
        """Tracks, speakers, sessions and links are created together."""
        summary = _stage(feed_document).commit()

        assert summary == CommitSummary(tracks=2, speakers=1, sessions=1, links=1)
        session = Session.objects.get()
        assert session.track is not None
        assert session.track.name == "Web"
        assert list(session.speakers.values_list("name", flat=True)) == ["Ada Lovelace"]
        assert session.duration == 60  # noqa: PLR2004
        assert timezone.is_aware(session.start_time)

    def test_sessions_share_track_rows(self, feed_document: dict[str, Any]) -> None:
        """Sessions staged with the same track point at one row."""
        feed_document["sessions"].append(session_entry("1002", categoryItems=[101]))
        _stage(feed_document).commit()
        assert Track.objects.count() == 2  # noqa: PLR2004
        assert Session.objects.filter(track__name="Web").count() == 2  # noqa: PLR2004

    def test_untracked_session(self, feed_document: dict[str, Any]) -> None:
        """Sessions without a track are saved with a null track."""
        feed_document["sessions"] = [session_entry("1003", categoryItems=[201])]
        _stage(feed_document).commit()
        assert Session.objects.get().track is None

    def test_empty_sink(self) -> None:
        """Committing nothing writes nothing."""
        assert DjangoSink().commit() == CommitSummary()
        assert not SessionSpeaker.objects.exists()
