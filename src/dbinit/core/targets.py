"""Target resolution.

A target is a logical name such as `app/tables/users` (schema definitions) or
`app/users` (initial data). Resolution turns it into the SQL file that holds
its statement and a human-readable description. Nothing here touches the
file system except `plan_targets`, which only checks for file existence.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from dbinit.core.errors import InvalidTargetError, UnknownObjectTypeError
from dbinit.core.models import DEFAULT_DATA_PATH, DEFAULT_DEFINITION_PATH


@dataclass(frozen=True)
class ResolvedTarget:
    """
    A target resolved to its SQL file.

    Attributes:
        target: The original target string.
        database: Database segment of the target.
        name: Object name (definitions) or table name (data).
        description: Human-readable label, e.g. `Table app.users`.
        path: Location of the target's SQL file.
    """

    target: str
    database: str
    name: str
    description: str
    path: Path


@dataclass(frozen=True)
class PlannedTarget:
    """Preview entry for a target, as shown by `dbinit plan`."""

    target: str
    description: str
    path: Path | None
    exists: bool
    error: str | None = None


def _split(target: str, expected: int, shape: str) -> list[str]:
    """Split a target on `/` and validate the segment count."""
    parts = target.split("/")
    if len(parts) != expected or not all(parts):
        raise InvalidTargetError(f"Target '{target}' must be in the form `{shape}`.")
    return parts


def _target_path(target: str, root: str | Path) -> Path:
    return Path(root) / f"{target}.sql"


def describe_definition(target: str) -> str:
    """
    Return the description for a schema definition target.

    Raises:
        InvalidTargetError: If the target is not `database/category/name`.
        UnknownObjectTypeError: If the category is not database, tables or
            triggers.
    """
    database, category, name = _split(target, 3, "database/category/name")

    if category == "database":
        return f"Database {database}"
    if "tables" in target:
        return f"Table {database}.{name}"
    if "triggers" in target:
        return f"Trigger {database}.{name}"

    raise UnknownObjectTypeError(f"Unknown object type {database}/{category}/{name}")


def resolve_definition(
    target: str, root: str | Path | None = None
) -> ResolvedTarget:
    """Resolve a schema definition target to its SQL file and description."""
    description = describe_definition(target)
    database, _, name = target.split("/")
    return ResolvedTarget(
        target=target,
        database=database,
        name=name,
        description=description,
        path=_target_path(target, root or DEFAULT_DEFINITION_PATH),
    )


def resolve_data(target: str, root: str | Path | None = None) -> ResolvedTarget:
    """Resolve an initial-data target (`database/table`) to its SQL file."""
    database, table = _split(target, 2, "database/table")
    return ResolvedTarget(
        target=target,
        database=database,
        name=table,
        description=f"{database}.{table}",
        path=_target_path(target, root or DEFAULT_DATA_PATH),
    )


def plan_targets(
    targets: Iterable[str],
    root: str | Path | None,
    *,
    data: bool = False,
) -> list[PlannedTarget]:
    """Resolve every target and report whether its SQL file is present."""
    resolve = resolve_data if data else resolve_definition
    planned: list[PlannedTarget] = []

    for target in targets:
        try:
            resolved = resolve(target, root)
        except (InvalidTargetError, UnknownObjectTypeError) as exc:
            planned.append(
                PlannedTarget(
                    target=target,
                    description="",
                    path=None,
                    exists=False,
                    error=str(exc),
                )
            )
            continue

        planned.append(
            PlannedTarget(
                target=target,
                description=resolved.description,
                path=resolved.path,
                exists=resolved.path.is_file(),
            )
        )

    return planned
