"""Core data structures for database initialization.

This module defines the run configuration, the per-statement result returned
by an executor and the per-target outcome produced by the appliers. It is
intentionally free of CLI and SQLAlchemy concerns so the same types can be
used by the CLI, by automation and by tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

DEFAULT_DEFINITION_PATH = "definitions"
DEFAULT_DATA_PATH = "initial-data"


@dataclass(frozen=True)
class ConnectionSettings:
    """
    Connection parameters for the target server.

    Attributes:
        host: Server host name.
        port: Server TCP port.
        user: Login user.
        password: Login password. May be None for socket/auth-plugin setups.
        database: Optional default database for new connections.
        charset: Connection character set.
        pool_size: Number of pooled connections kept open.
        connect_timeout: Seconds to wait when opening a connection.
    """

    host: str
    port: int = 3306
    user: str | None = None
    password: str | None = None
    database: str | None = None
    charset: str = "utf8mb4"
    pool_size: int = 5
    connect_timeout: int = 10


@dataclass(frozen=True)
class RunMeta:
    """Optional run metadata: file roots and the minimum server version."""

    definition_path: str = DEFAULT_DEFINITION_PATH
    data_path: str = DEFAULT_DATA_PATH
    required_major_version: int | None = None


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable input for one initialization run.

    Attributes:
        connection: Parameters handed to the executor factory.
        definitions: Ordered schema targets (`database/category/name`).
        initial_data: Ordered seed-data targets (`database/table`).
        meta: File roots and version requirement.
    """

    connection: ConnectionSettings
    definitions: tuple[str, ...] = ()
    initial_data: tuple[str, ...] = ()
    meta: RunMeta = field(default_factory=RunMeta)


@dataclass(frozen=True)
class StatementResult:
    """Structured result of a single executed statement."""

    rows: list[Mapping[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    warning_count: int = 0


class Outcome(str, Enum):
    """
    Classification of what happened to a single target.

    Values:
        CREATED: The statement ran cleanly (object created / table seeded).
        ALREADY_EXISTS: The server signaled the object was already there.
        SKIPPED: The target was not executed (bad shape, non-empty table).
        FAILED: Reading or executing the target failed.
    """

    CREATED = "CREATED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TargetResult:
    """Result for a single definition or seed-data target."""

    target: str
    description: str
    outcome: Outcome
    reason: str | None = None
    inserted_rows: int | None = None
    duplicate_rows: int | None = None


@dataclass
class PhaseReport:
    """Ordered target results for one phase (definitions or initial data)."""

    name: str
    results: list[TargetResult] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of targets created (definitions) or initialized (data)."""
        return sum(1 for r in self.results if r.outcome == Outcome.CREATED)

    def by_outcome(self, outcome: Outcome) -> list[TargetResult]:
        """Return the results with the given outcome, in processing order."""
        return [r for r in self.results if r.outcome == outcome]


@dataclass
class RunReport:
    """Everything a completed run produced."""

    server_version: str | None
    definitions: PhaseReport
    initial_data: PhaseReport
