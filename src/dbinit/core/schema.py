"""Schema definition phase.

Applies table, trigger and database definitions in list order. Every target
is independent: a missing file or a failing statement is recorded for that
target and the loop moves on. The only way out of the loop early is an
invalid database name, which points at a broken configuration.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from dbinit.core.blobs import BlobReader
from dbinit.core.errors import (
    BlobReadError,
    ExecutorError,
    InvalidDatabaseNameError,
    InvalidTargetError,
    UnknownObjectTypeError,
)
from dbinit.core.executor import NullReporter, Reporter, SqlExecutor
from dbinit.core.models import Outcome, PhaseReport, TargetResult
from dbinit.core.outcomes import classify_definition
from dbinit.core.targets import resolve_definition

PHASE_NAME = "definitions"

DATABASE_EXISTS_SQL = (
    "SELECT 1 AS db_exists "
    "FROM INFORMATION_SCHEMA.SCHEMATA "
    "WHERE SCHEMA_NAME = :name"
)

CREATE_DATABASE_SQL = (
    "CREATE DATABASE IF NOT EXISTS `{database}` "
    "CHARACTER SET = 'utf8mb4' "
    "COLLATE = 'utf8mb4_general_ci'"
)

_WHITESPACE = re.compile(r"\s")


def validate_database_name(database: str) -> None:
    """Raise InvalidDatabaseNameError if the name contains whitespace or backticks."""
    if not database or _WHITESPACE.search(database) or "`" in database:
        raise InvalidDatabaseNameError(f"Invalid database name: {database!r}")


def ensure_database(
    executor: SqlExecutor,
    database: str,
    cache: set[str],
) -> None:
    """
    Make sure `database` exists, checking the server at most once per run.

    The name is validated before the executor is involved. After the check
    the database is cached whether or not creation succeeded.

    Raises:
        InvalidDatabaseNameError: If the name is malformed (fatal).
        ExecutorError: If the existence check or creation failed.
    """
    if database in cache:
        return

    validate_database_name(database)

    try:
        result = executor.execute(DATABASE_EXISTS_SQL, {"name": database})
        if not result.rows:
            executor.execute(CREATE_DATABASE_SQL.format(database=database))
    finally:
        cache.add(database)


def apply_definition(
    executor: SqlExecutor,
    reader: BlobReader,
    target: str,
    root: str | Path | None,
    cache: set[str],
) -> TargetResult:
    """Apply a single schema definition target and classify the outcome."""
    try:
        resolved = resolve_definition(target, root)
    except (InvalidTargetError, UnknownObjectTypeError) as exc:
        return TargetResult(
            target=target, description=target, outcome=Outcome.SKIPPED, reason=str(exc)
        )

    try:
        content = reader.read(resolved.path)
    except BlobReadError as exc:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.FAILED,
            reason=f"An error occurred while reading definition file {target}.sql: {exc}",
        )

    try:
        ensure_database(executor, resolved.database, cache)
    except ExecutorError as exc:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.FAILED,
            reason=f"Could not ensure database {resolved.database}: {exc}",
        )

    try:
        result = executor.execute(content)
    except ExecutorError as exc:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.FAILED,
            reason=f"An error occurred while executing {target}.sql: {exc}",
        )

    outcome = classify_definition(result)
    return TargetResult(
        target=target,
        description=resolved.description,
        outcome=outcome,
        reason="already exists" if outcome == Outcome.ALREADY_EXISTS else None,
    )


def apply_schema(
    executor: SqlExecutor,
    reader: BlobReader,
    targets: Iterable[str],
    root: str | Path | None = None,
    *,
    cache: set[str] | None = None,
    reporter: Reporter | None = None,
) -> PhaseReport:
    """
    Apply schema definition targets in order.

    Args:
        executor: Executor used for existence checks and definition SQL.
        reader: Reader used to load each target's SQL file.
        targets: Ordered `database/category/name` targets.
        root: Directory holding the definition files.
        cache: Databases already confirmed during this run. A fresh set is
            used when omitted.
        reporter: Receives one event per processed target.

    Returns:
        PhaseReport with one result per target; `count` is the number of
        objects created.

    Raises:
        InvalidDatabaseNameError: If a target names a malformed database.
            Targets after it are not processed.
    """
    reporter = reporter or NullReporter()
    cache = set() if cache is None else cache
    report = PhaseReport(name=PHASE_NAME)

    reporter.phase_started(PHASE_NAME)
    for target in targets:
        result = apply_definition(executor, reader, target, root, cache)
        report.results.append(result)
        reporter.target_finished(result)
    reporter.phase_finished(report)

    return report
