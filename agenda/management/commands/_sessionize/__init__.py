"""
Private helpers for the ``import_sessionize`` management command.

* **client** - feed download with retry and schema validation.
* **context** - ``ImportContext`` frozen dataclass (typed Parameter Object).
* **exceptions** - import error hierarchy.
* **loader** - ``DataLoader`` base class and the ``SessionizeDataLoader`` normalizer.
* **mixins** - ``LoggingMixin`` and ``ImportMixin`` for the Command class.
* **records** - staged records, the per-import ``ImportArena`` and ``ImportResult``.
* **schema** - Pydantic models of the Sessionize JSON feed.
* **sink** - staging sinks (in-memory and Django ORM).
* **types** - shared enums and protocols (``VerbosityLevel``, ``ReferencePolicy``, ``LogFn``).
"""
