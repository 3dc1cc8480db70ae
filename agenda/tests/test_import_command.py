"""Tests for the import_sessionize management command."""

from io import StringIO
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from django.core.management import call_command
from pytest_django.fixtures import SettingsWrapper

from agenda.management.commands._sessionize.exceptions import FeedError
from agenda.models import Session, SessionSpeaker, Speaker, Track

from .conftest import FEED_URL, build_feed, session_entry


FETCH = "agenda.management.commands._sessionize.loader.fetch_feed"


def _run(**options: Any) -> tuple[str, str]:
    out, err = StringIO(), StringIO()
    call_command("import_sessionize", stdout=out, stderr=err, **options)
    return out.getvalue(), err.getvalue()


@pytest.mark.django_db
class TestImportSessionizeCommand:
    """Verify the command end to end with the feed download patched out."""

    def test_import_saves_everything(self, feed_document: dict[str, Any]) -> None:
        """A successful import commits tracks, speakers, sessions and links."""
        with patch(FETCH, return_value=build_feed(feed_document)) as mock_fetch:
            out, err = _run(url=FEED_URL)

        assert mock_fetch.call_args[0][0] == FEED_URL
        assert "Import complete: 1 sessions, 1 speakers, 2 tracks staged" in out
        assert err == ""
        assert Track.objects.count() == 2  # noqa: PLR2004
        assert Speaker.objects.count() == 1
        assert Session.objects.count() == 1
        assert SessionSpeaker.objects.count() == 1

    def test_dry_run_saves_nothing(self, feed_document: dict[str, Any]) -> None:
        """A dry run reports counts without touching the database."""
        with patch(FETCH, return_value=build_feed(feed_document)):
            out, _ = _run(url=FEED_URL, dry_run=True)

        assert "DRY RUN" in out
        assert "1 sessions" in out
        assert not Session.objects.exists()
        assert not Track.objects.exists()

    def test_aborted_import_saves_nothing(self, feed_document: dict[str, Any]) -> None:
        """A broken speaker reference aborts before anything is committed."""
        feed_document["sessions"].append(session_entry("9001", speakers=["spk-ghost"]))
        with patch(FETCH, return_value=build_feed(feed_document)):
            _, err = _run(url=FEED_URL)

        assert "Import aborted" in err
        assert "nothing was saved" in err
        assert not Session.objects.exists()
        assert not Speaker.objects.exists()

    def test_collect_policy_keeps_valid_sessions(self, feed_document: dict[str, Any]) -> None:
        """Collecting drops the broken session and saves the rest."""
        feed_document["sessions"].append(session_entry("9001", speakers=["spk-ghost"]))
        with patch(FETCH, return_value=build_feed(feed_document)):
            out, _ = _run(url=FEED_URL, on_reference_error="collect")

        assert "1 reference errors" in out
        assert list(Session.objects.values_list("title", flat=True)) == [
            "Building APIs with Django",
        ]

    def test_feed_error_is_reported(self) -> None:
        """Download failures are reported on stderr and nothing is saved."""
        with patch(FETCH, side_effect=FeedError(FEED_URL, "HTTP 500")):
            _, err = _run(url=FEED_URL)

        assert "Failed to fetch feed: HTTP 500" in err
        assert not Session.objects.exists()

    def test_missing_url(self, settings: SettingsWrapper) -> None:
        """Without a URL the command reports an error and does nothing."""
        settings.SESSIONIZE_URL = ""
        with patch(FETCH) as mock_fetch:
            _, err = _run(url="")

        assert "No feed URL given" in err
        mock_fetch.assert_not_called()

    def test_file_import_is_refused(self, tmp_path: Path) -> None:
        """Importing from a file reports that it is not supported."""
        feed_file = tmp_path / "feed.json"
        feed_file.write_text("{}")
        _, err = _run(file=str(feed_file))
        assert "Cannot import from file" in err

    def test_unexpected_error_shows_traceback_at_debug(self) -> None:
        """Unexpected failures print a traceback only at the highest verbosity."""
        with patch(FETCH, side_effect=RuntimeError("boom")):
            _, err = _run(url=FEED_URL, verbosity=3)

        assert "An unexpected error occurred: boom" in err
        assert "Traceback" in err
