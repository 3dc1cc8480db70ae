"""
Command mixins that compose with :class:`~django.core.management.base.BaseCommand`.

* :class:`LoggingMixin` -- verbosity-aware console output.
* :class:`ImportMixin` -- runs the Sessionize loader against a sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agenda.management.commands._sessionize.exceptions import (
    FeedError,
    ReferenceIntegrityError,
)
from agenda.management.commands._sessionize.loader import SessionizeDataLoader
from agenda.management.commands._sessionize.records import ImportResult
from agenda.management.commands._sessionize.types import VerbosityLevel


if TYPE_CHECKING:
    import httpx
    from django.core.management.base import OutputWrapper
    from django.core.management.color import Style

    from agenda.management.commands._sessionize.context import ImportContext
    from agenda.management.commands._sessionize.sink import StagingSink


# ------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------


class LoggingMixin:
    """
    Verbosity-aware logging for ``BaseCommand`` subclasses.

    Relies on ``stdout``, ``stderr``, and ``style`` attributes provided by
    :class:`~django.core.management.base.BaseCommand`.
    """

    stdout: OutputWrapper
    stderr: OutputWrapper
    style: Style

    def _log(
        self,
        message: str,
        verbosity: VerbosityLevel,
        min_level: VerbosityLevel,
        style: str | None = None,
    ) -> None:
        """
        Write *message* to stdout/stderr when *verbosity* >= *min_level*.

        ``"ERROR"`` output always goes to *stderr*; ``"SUCCESS"`` and ``"WARNING"`` are styled
        on *stdout*.
        """
        if verbosity.value < min_level.value:
            return
        if style == "SUCCESS":
            self.stdout.write(self.style.SUCCESS(message))
        elif style == "WARNING":
            self.stdout.write(self.style.WARNING(message))
        elif style == "ERROR":
            self.stderr.write(self.style.ERROR(message))
        else:
            self.stdout.write(message)


# ------------------------------------------------------------------
# Importing
# ------------------------------------------------------------------


class ImportMixin(LoggingMixin):
    """Runs a Sessionize import and turns importer failures into an :class:`ImportResult`."""

    def _run_import(
        self,
        url: str,
        sink: StagingSink,
        ctx: ImportContext,
        http_client: httpx.Client | None = None,
    ) -> ImportResult:
        """Fetch and normalize the feed at *url* into *sink*; never raises importer errors."""
        loader = SessionizeDataLoader(ctx, http_client=http_client)

        try:
            result = loader.load_sessionize_data(url, sink)
        except FeedError as exc:
            ctx.log(f"Failed to fetch feed: {exc.reason}", VerbosityLevel.MINIMAL, "ERROR")
            return ImportResult(failure=str(exc))
        except ReferenceIntegrityError as exc:
            ctx.log(f"Import aborted: {exc}", VerbosityLevel.MINIMAL, "ERROR")
            return exc.result

        for error in result.errors:
            ctx.log(f"Reference error: {error}", VerbosityLevel.DETAILED, "WARNING")
        return result
