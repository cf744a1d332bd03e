"""Translation of raw statement results into target outcomes.

The server reports "nothing happened because it was already there" through
its warning count (e.g. `CREATE TABLE IF NOT EXISTS` on an existing table,
or `INSERT IGNORE` skipping duplicate keys). All interpretation of that
number lives here.
"""

from __future__ import annotations

from dbinit.core.models import Outcome, StatementResult


def classify_definition(result: StatementResult) -> Outcome:
    """Return CREATED for a warning-free result, ALREADY_EXISTS otherwise."""
    if result.warning_count == 0:
        return Outcome.CREATED
    return Outcome.ALREADY_EXISTS


def seed_row_counts(result: StatementResult) -> tuple[int, int]:
    """
    Return `(inserted_rows, duplicate_rows)` for a seed insert.

    Inserted rows come from the affected-row count. Duplicate rows come from
    the warning count, which is what `INSERT IGNORE` raises once per skipped
    row.
    """
    return max(result.affected_rows, 0), max(result.warning_count, 0)
