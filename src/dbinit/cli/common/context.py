"""Run context construction for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from dbinit.cli.common.exits import exit_from_exc
from dbinit.cli.common.output import out
from dbinit.core.adapters.sqlalchemy_executor import open_executor
from dbinit.core.config import load_config
from dbinit.core.errors import ConfigError
from dbinit.core.executor import SqlExecutor
from dbinit.core.models import ConnectionSettings, RunConfig


@dataclass
class RunAppContext:
    """Configuration and executor factory for a single CLI invocation."""

    config_path: Path
    config: RunConfig

    def open_executor(self, settings: ConnectionSettings) -> SqlExecutor:
        """Open the connection pool, announcing progress on the console."""
        out.info("Starting database connection")
        with out.status(f"Connecting to {settings.host}:{settings.port}..."):
            executor = open_executor(settings)
        out.info("Database connection started")
        return executor


def _absolute(path: str | None) -> str | None:
    """Anchor CLI-supplied paths at the current working directory."""
    return str(Path(path).expanduser().resolve()) if path else None


def build_run_context(
    config_path: Path,
    *,
    host: str | None = None,
    port: int | None = None,
    user: str | None = None,
    password: str | None = None,
    definitions_path: str | None = None,
    data_path: str | None = None,
    min_version: int | None = None,
    require_connection: bool = True,
) -> RunAppContext:
    """
    Load the run configuration, applying CLI/env overrides.

    Exits with code 2 if the configuration is missing or malformed.
    """
    try:
        config = load_config(
            config_path,
            connection_overrides={
                "host": host,
                "port": port,
                "user": user,
                "password": password,
            },
            definition_path=_absolute(definitions_path),
            data_path=_absolute(data_path),
            required_major_version=min_version,
            require_connection=require_connection,
        )
    except ConfigError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=2)
    return RunAppContext(config_path=config_path, config=config)
