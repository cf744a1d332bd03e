"""Initial data phase.

Seeds tables from INSERT scripts. A table that already holds rows is never
touched, regardless of whether its script would be safe to re-run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from dbinit.core.blobs import BlobReader
from dbinit.core.errors import BlobReadError, ExecutorError, InvalidTargetError
from dbinit.core.executor import NullReporter, Reporter, SqlExecutor
from dbinit.core.models import Outcome, PhaseReport, TargetResult
from dbinit.core.outcomes import seed_row_counts
from dbinit.core.targets import ResolvedTarget, resolve_data

PHASE_NAME = "initial data"

COUNT_ROWS_SQL = "SELECT COUNT(*) AS row_count FROM `{database}`.`{table}`"


def count_rows(executor: SqlExecutor, resolved: ResolvedTarget) -> int:
    """Return the number of rows currently in the target's table."""
    if "`" in resolved.database or "`" in resolved.name:
        raise InvalidTargetError(f"Invalid table name: {resolved.description}")
    result = executor.execute(
        COUNT_ROWS_SQL.format(database=resolved.database, table=resolved.name)
    )
    if not result.rows:
        return 0
    return int(result.rows[0].get("row_count") or 0)


def apply_data(
    executor: SqlExecutor,
    reader: BlobReader,
    target: str,
    root: str | Path | None,
) -> TargetResult:
    """Seed a single table if it is empty."""
    try:
        resolved = resolve_data(target, root)
    except InvalidTargetError as exc:
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
            reason=f"An error occurred while reading initial data file {target}.sql: {exc}",
        )

    try:
        existing = count_rows(executor, resolved)
    except InvalidTargetError as exc:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.SKIPPED,
            reason=str(exc),
        )
    except ExecutorError as exc:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.FAILED,
            reason=f"Could not count rows in {resolved.description}: {exc}",
        )

    if existing > 0:
        return TargetResult(
            target=target,
            description=resolved.description,
            outcome=Outcome.SKIPPED,
            reason="table is not empty",
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

    inserted, duplicates = seed_row_counts(result)
    return TargetResult(
        target=target,
        description=resolved.description,
        outcome=Outcome.CREATED,
        inserted_rows=inserted,
        duplicate_rows=duplicates,
    )


def apply_seed_data(
    executor: SqlExecutor,
    reader: BlobReader,
    targets: Iterable[str],
    root: str | Path | None = None,
    *,
    reporter: Reporter | None = None,
) -> PhaseReport:
    """
    Seed `database/table` targets in order.

    Returns:
        PhaseReport with one result per target; `count` is the number of
        tables initialized.
    """
    reporter = reporter or NullReporter()
    report = PhaseReport(name=PHASE_NAME)

    reporter.phase_started(PHASE_NAME)
    for target in targets:
        result = apply_data(executor, reader, target, root)
        report.results.append(result)
        reporter.target_finished(result)
    reporter.phase_finished(report)

    return report
