"""Shared enums and protocols for the Sessionize importer."""

from enum import Enum, StrEnum
from typing import Protocol


class VerbosityLevel(Enum):
    """Django management-command verbosity levels (mirrors the built-in ``--verbosity`` flag)."""

    MINIMAL = 0
    NORMAL = 1
    DETAILED = 2
    DEBUG = 3


class ReferencePolicy(StrEnum):
    """
    What to do when the feed references something it does not define.

    ``ABORT`` stops the whole import, ``COLLECT`` records the problem and carries on.
    """

    ABORT = "abort"
    COLLECT = "collect"


class LogFn(Protocol):
    """
    Callback signature accepted by :meth:`ImportContext.log`.

    Matches :meth:`LoggingMixin._log`.
    """

    def __call__(
        self,
        message: str,
        verbosity: VerbosityLevel,
        min_level: VerbosityLevel,
        style: str | None = None,
    ) -> None: ...


def null_log(
    message: str,
    verbosity: VerbosityLevel,
    min_level: VerbosityLevel,
    style: str | None = None,
) -> None:
    """Discard log output; used when the importer runs outside a management command."""
    del message, verbosity, min_level, style
