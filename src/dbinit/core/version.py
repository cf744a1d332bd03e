"""Server version gate."""

from __future__ import annotations

from dbinit.core.errors import ExecutorError, VersionError
from dbinit.core.executor import SqlExecutor

VERSION_SQL = "SELECT VERSION() AS version"


def parse_major_version(version: str) -> int | None:
    """Return the numeric part before the first `.`, or None if not a number."""
    head = str(version).strip().split(".", 1)[0]
    try:
        return int(head)
    except ValueError:
        return None


def query_server_version(executor: SqlExecutor) -> str:
    """Return the version string reported by the server."""
    result = executor.execute(VERSION_SQL)
    if not result.rows:
        raise ExecutorError("Server returned no version information.")
    row = result.rows[0]
    version = row.get("version")
    if version is None:
        raise ExecutorError("Server returned no version information.")
    return str(version)


def check_version(executor: SqlExecutor, min_major: int) -> str:
    """
    Ensure the server's major version is at least `min_major`.

    Returns:
        The version string reported by the server.

    Raises:
        VersionError: If the version cannot be parsed or is too old.
    """
    version = query_server_version(executor)
    major = parse_major_version(version)
    if major is None or major < min_major:
        raise VersionError(
            f"Your version of the database server is too old! Use at least "
            f"{min_major}.0 or newer. Your version: {version}"
        )
    return version
