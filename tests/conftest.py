from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from dbinit.core.errors import BlobReadError, ExecutorError  # noqa: E402
from dbinit.core.models import StatementResult  # noqa: E402

_COUNT_RE = re.compile(r"FROM `(?P<db>[^`]+)`\.`(?P<table>[^`]+)`")


class SpyExecutor:
    """In-memory stand-in for a server that records every statement.

    Definition statements behave like `CREATE ... IF NOT EXISTS`: the first
    execution is clean, every repeat raises a warning.
    """

    def __init__(
        self,
        *,
        version: str = "10.11.2-MariaDB",
        databases: tuple[str, ...] = (),
        row_counts: dict[str, int] | None = None,
        failing: tuple[str, ...] = (),
        affected: dict[str, int] | None = None,
        warnings: dict[str, int] | None = None,
    ):
        self.version = version
        self.databases = set(databases)
        self.row_counts = dict(row_counts or {})
        self.failing = set(failing)
        self.affected = dict(affected or {})
        self.warnings = dict(warnings or {})
        self.calls: list[str] = []
        self.applied: set[str] = set()
        self.created_databases: list[str] = []
        self.closed = 0

    def execute(self, sql: str, params=None) -> StatementResult:
        self.calls.append(sql)

        if sql.startswith("SELECT VERSION()"):
            return StatementResult(rows=[{"version": self.version}])
        if "INFORMATION_SCHEMA.SCHEMATA" in sql:
            name = params["name"]
            return StatementResult(rows=[{"db_exists": 1}] if name in self.databases else [])
        if sql.startswith("CREATE DATABASE"):
            name = sql.split("`")[1]
            self.created_databases.append(name)
            self.databases.add(name)
            return StatementResult(affected_rows=1)
        if sql.startswith("SELECT COUNT(*)"):
            m = _COUNT_RE.search(sql)
            key = f"{m.group('db')}.{m.group('table')}"
            if key in self.failing:
                raise ExecutorError(f"Table '{key}' doesn't exist")
            return StatementResult(rows=[{"row_count": self.row_counts.get(key, 0)}])

        if sql in self.failing:
            raise ExecutorError("You have an error in your SQL syntax")
        if sql in self.warnings:
            return StatementResult(
                affected_rows=self.affected.get(sql, 0), warning_count=self.warnings[sql]
            )

        warning_count = 1 if sql in self.applied else 0
        self.applied.add(sql)
        return StatementResult(
            affected_rows=self.affected.get(sql, 0), warning_count=warning_count
        )

    def statements(self) -> list[str]:
        """Return calls that came from target files (not built by the core)."""
        builtin = ("SELECT VERSION()", "SELECT 1 AS db_exists", "CREATE DATABASE", "SELECT COUNT(*)")
        return [c for c in self.calls if not c.startswith(builtin)]

    def close(self) -> None:
        self.closed += 1


class MemoryReader:
    """Blob reader backed by a dict of posix path -> SQL text."""

    def __init__(self, files: dict[str, str]):
        self.files = files
        self.reads: list[str] = []

    def read(self, path: Path) -> str:
        key = Path(path).as_posix()
        self.reads.append(key)
        if key not in self.files:
            raise BlobReadError(f"{key} does not exist")
        return self.files[key]


class RecordingReporter:
    def __init__(self):
        self.events: list[tuple[str, object]] = []

    def phase_started(self, name: str) -> None:
        self.events.append(("start", name))

    def target_finished(self, result) -> None:
        self.events.append(("target", result.target))

    def phase_finished(self, report) -> None:
        self.events.append(("finish", report.name))


@pytest.fixture
def spy_executor():
    return SpyExecutor


@pytest.fixture
def memory_reader():
    return MemoryReader


@pytest.fixture
def recording_reporter():
    return RecordingReporter()
