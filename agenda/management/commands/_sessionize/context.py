"""Typed import context - Parameter Object for the Sessionize importer."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from tenacity import wait_exponential
from tenacity.wait import wait_base

from agenda.management.commands._sessionize.types import (
    LogFn,
    ReferencePolicy,
    VerbosityLevel,
    null_log,
)


@dataclass(frozen=True)
class ImportContext:
    """
    Immutable, typed context shared across the entire import pipeline.

    Provides a convenience :meth:`log` that eliminates the need to pass *verbosity* on every call.
    """

    verbosity: VerbosityLevel = VerbosityLevel.NORMAL
    log_fn: LogFn = null_log
    dry_run: bool = False
    max_retries: int = 1
    timeout: float = 30.0
    reference_policy: ReferencePolicy = ReferencePolicy.ABORT
    retry_wait: wait_base = field(
        default_factory=lambda: wait_exponential(multiplier=1, min=1, max=60),
    )

    def log(
        self,
        message: str,
        min_level: VerbosityLevel,
        style: str | None = None,
    ) -> None:
        """Emit *message* when ``self.verbosity >= min_level``."""
        self.log_fn(message, self.verbosity, min_level, style)

    def evolve(self, **changes: Any) -> ImportContext:
        """Return a shallow copy with *changes* applied (frozen-dataclass update)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_options(
        cls,
        options: dict[str, Any],
        *,
        log_fn: LogFn,
        timeout: float = 30.0,
    ) -> ImportContext:
        """Construct from Django's parsed ``options`` dict (as passed to ``handle()``)."""
        return cls(
            verbosity=VerbosityLevel(options["verbosity"]),
            log_fn=log_fn,
            dry_run=options.get("dry_run", False),
            max_retries=options.get("max_retries", 1) or 1,
            timeout=timeout,
            reference_policy=ReferencePolicy(
                options.get("on_reference_error") or ReferencePolicy.ABORT,
            ),
        )
