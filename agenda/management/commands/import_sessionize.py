"""Management command for one-way (Sessionize » Django) import of tracks, speakers and sessions."""
# ruff: noqa: BLE001

import traceback
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandParser

from agenda.management.commands._sessionize.context import ImportContext
from agenda.management.commands._sessionize.loader import SessionizeDataLoader
from agenda.management.commands._sessionize.mixins import ImportMixin
from agenda.management.commands._sessionize.sink import DjangoSink, MemorySink
from agenda.management.commands._sessionize.types import ReferencePolicy, VerbosityLevel


class Command(ImportMixin, BaseCommand):
    """Fetch the Sessionize feed, normalize it, and save the result to the database."""

    help = "Import tracks, speakers and sessions from a Sessionize feed"

    def add_arguments(self, parser: CommandParser) -> None:
        """Add command line arguments."""
        parser.add_argument(
            "--url",
            type=str,
            default=settings.SESSIONIZE_URL,
            help="URL of the Sessionize 'All data' JSON feed",
        )
        parser.add_argument(
            "--file",
            type=str,
            default=None,
            help="Import from a local file instead of a URL (not supported for Sessionize)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Normalize the feed without saving to the database",
        )
        parser.add_argument(
            "--max-retries",
            type=int,
            default=1,
            help="Maximum number of attempts for the feed request",
        )
        parser.add_argument(
            "--on-reference-error",
            choices=[policy.value for policy in ReferencePolicy],
            default=ReferencePolicy.ABORT.value,
            help="Abort the import or collect broken references and carry on",
        )

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: ARG002
        """Execute the command to import the Sessionize feed."""
        ctx = ImportContext.from_options(
            options,
            log_fn=self._log,
            timeout=settings.SESSIONIZE_TIMEOUT,
        )

        try:
            if options.get("file"):
                self._import_file(options["file"], ctx)
                return

            url = options.get("url")
            if not url:
                self.stderr.write(
                    self.style.ERROR("No feed URL given; pass --url or set SESSIONIZE_URL"),
                )
                return

            if ctx.dry_run:
                ctx.log(
                    "DRY RUN: No changes will be saved to the database",
                    VerbosityLevel.NORMAL,
                    "WARNING",
                )

            sink = MemorySink() if ctx.dry_run else DjangoSink()
            result = self._run_import(url, sink, ctx)

            if not result.ok:
                ctx.log(
                    "Import failed; nothing was saved to the database",
                    VerbosityLevel.MINIMAL,
                    "ERROR",
                )
                return

            if isinstance(sink, DjangoSink):
                committed = sink.commit()
                ctx.log(
                    f"Saved {committed.sessions} sessions, {committed.speakers} speakers, "
                    f"{committed.tracks} tracks and {committed.links} speaker links",
                    VerbosityLevel.DETAILED,
                    "SUCCESS",
                )

            ctx.log(f"Import complete: {result.summary()}", VerbosityLevel.NORMAL, "SUCCESS")

        except Exception as e:
            self.stderr.write(self.style.ERROR(f"An unexpected error occurred: {e!s}"))
            if ctx.verbosity.value >= VerbosityLevel.DEBUG.value:
                self.stderr.write(traceback.format_exc())

    def _import_file(self, path: str, ctx: ImportContext) -> None:
        """Route a file import to the loader and report why it cannot be done."""
        loader = SessionizeDataLoader(ctx)
        try:
            with open(path, "rb") as file_obj:  # noqa: PTH123
                loader.load_data(file_obj, MemorySink())
        except NotImplementedError as exc:
            ctx.log(f"Cannot import from file: {exc}", VerbosityLevel.MINIMAL, "ERROR")
        except OSError as exc:
            ctx.log(f"Cannot open {path}: {exc}", VerbosityLevel.MINIMAL, "ERROR")
