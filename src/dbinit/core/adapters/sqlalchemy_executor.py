from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from dbinit.core.errors import ExecutorError
from dbinit.core.models import ConnectionSettings, StatementResult

WARNING_COUNT_SQL = "SELECT @@warning_count"


def build_url(settings: ConnectionSettings) -> URL:
    """Return the SQLAlchemy URL for a MariaDB/MySQL server reached through PyMySQL."""
    return URL.create(
        "mysql+pymysql",
        username=settings.user,
        password=settings.password,
        host=settings.host,
        port=settings.port,
        database=settings.database,
        query={"charset": settings.charset},
    )


class SqlAlchemyExecutor:
    """Executor backed by a pooled SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._closed = False

    @classmethod
    def open(cls, settings: ConnectionSettings) -> "SqlAlchemyExecutor":
        """Create the connection pool and verify that the server is reachable."""
        try:
            engine = create_engine(
                build_url(settings),
                pool_size=settings.pool_size,
                pool_pre_ping=True,
                connect_args={"connect_timeout": settings.connect_timeout},
            )
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            raise ExecutorError(
                f"Could not create database connection pool: {exc}"
            ) from exc
        return cls(engine)

    def execute(
        self, sql: str, params: Mapping[str, Any] | None = None
    ) -> StatementResult:
        """Run one statement in its own transaction and collect its result."""
        if self._closed:
            raise ExecutorError("Executor is closed.")
        try:
            with self.engine.begin() as conn:
                # raw file contents go through unchanged so `:` and `%` stay literal
                if params:
                    result = conn.execute(text(sql), dict(params))
                else:
                    result = conn.exec_driver_sql(sql)

                if result.returns_rows:
                    rows = [dict(row._mapping) for row in result]
                    affected = len(rows)
                else:
                    rows = []
                    affected = max(result.rowcount, 0)

                warnings = conn.exec_driver_sql(WARNING_COUNT_SQL).scalar() or 0
        except SQLAlchemyError as exc:
            raise ExecutorError(str(exc)) from exc

        return StatementResult(
            rows=rows, affected_rows=affected, warning_count=int(warnings)
        )

    def close(self) -> None:
        """Dispose of the connection pool. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.engine.dispose()


def open_executor(settings: ConnectionSettings) -> SqlAlchemyExecutor:
    """Executor factory used by the CLI."""
    return SqlAlchemyExecutor.open(settings)
