"""Executor and reporter interfaces used by the core appliers.

The core builds every SQL statement it needs (existence checks, database
creation, row counts) and hands it to an executor. Keeping the interface this
small lets tests replace the server with a spy that records each statement.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol

from dbinit.core.models import ConnectionSettings, PhaseReport, StatementResult, TargetResult


class SqlExecutor(Protocol):
    """Interface for running statements against the server."""

    def execute(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> StatementResult:
        """Run one statement and return its result, or raise ExecutorError."""
        ...

    def close(self) -> None:
        """Release the underlying connection pool."""
        ...


ExecutorFactory = Callable[[ConnectionSettings], SqlExecutor]


class Reporter(Protocol):
    """Receives progress events while a run is in flight."""

    def phase_started(self, name: str) -> None:
        """Called before the first target of a phase."""
        ...

    def target_finished(self, result: TargetResult) -> None:
        """Called once per processed target, in processing order."""
        ...

    def phase_finished(self, report: PhaseReport) -> None:
        """Called after the last target of a phase."""
        ...


class NullReporter:
    """Reporter that ignores every event."""

    def phase_started(self, name: str) -> None:
        return None

    def target_finished(self, result: TargetResult) -> None:
        return None

    def phase_finished(self, report: PhaseReport) -> None:
        return None
