"""Commands for applying definitions and initial data."""

from pathlib import Path

from rich.markup import escape

from dbinit.cli.common.context import RunAppContext, build_run_context
from dbinit.cli.common.exits import exit_from_exc, ok_exit, warn_exit
from dbinit.cli.common.options import (
    ConfigArg,
    ConfirmOpt,
    DataPathOpt,
    DefinitionsPathOpt,
    DryRunOpt,
    HostOpt,
    MinVersionOpt,
    PasswordOpt,
    PortOpt,
    UserOpt,
)
from dbinit.cli.common.output import out
from dbinit.cli.common.reporter import ConsoleReporter
from dbinit.core.errors import FatalError
from dbinit.core.runner import run_bootstrap
from dbinit.core.targets import plan_targets


def _show_plan(appctx: RunAppContext) -> bool:
    """Print resolved targets; return True if every target resolved to a file."""
    cfg = appctx.config
    definitions = plan_targets(cfg.definitions, cfg.meta.definition_path)
    initial_data = plan_targets(cfg.initial_data, cfg.meta.data_path, data=True)

    out.plan_table(definitions, title="Definitions")
    out.plan_table(initial_data, title="Initial data")

    return all(p.exists for p in [*definitions, *initial_data])


def run(
    config: Path = ConfigArg,
    host: str | None = HostOpt,
    port: int | None = PortOpt,
    user: str | None = UserOpt,
    password: str | None = PasswordOpt,
    definitions_path: str | None = DefinitionsPathOpt,
    data_path: str | None = DataPathOpt,
    min_version: int | None = MinVersionOpt,
    confirm: bool = ConfirmOpt,
    dry_run: bool = DryRunOpt,
):
    """
    Apply table definitions and initial data from a run configuration.
    """
    out.info("Script begin")

    appctx = build_run_context(
        config,
        host=host,
        port=port,
        user=user,
        password=password,
        definitions_path=definitions_path,
        data_path=data_path,
        min_version=min_version,
    )
    cfg = appctx.config

    out.header("Run configuration")
    out.kv(
        {
            "Config": escape(str(appctx.config_path)),
            "Server": f"{cfg.connection.host}:{cfg.connection.port}",
            "Definitions": f"{len(cfg.definitions)} from {escape(cfg.meta.definition_path)}",
            "Initial data": f"{len(cfg.initial_data)} from {escape(cfg.meta.data_path)}",
        }
    )

    if dry_run:
        _show_plan(appctx)
        warn_exit("Dry-run enabled: nothing was applied", code=0)

    if confirm and not out.confirm(f"Apply to {cfg.connection.host}?"):
        ok_exit("Cancelled")

    try:
        report = run_bootstrap(
            cfg,
            executor_factory=appctx.open_executor,
            reporter=ConsoleReporter(),
        )
    except FatalError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=1)

    if report.server_version:
        out.kv({"Server version": report.server_version})

    ok_exit("Script end")


def plan(
    config: Path = ConfigArg,
    definitions_path: str | None = DefinitionsPathOpt,
    data_path: str | None = DataPathOpt,
):
    """
    Show how targets resolve to files, without connecting.
    """
    appctx = build_run_context(
        config,
        require_connection=False,
        definitions_path=definitions_path,
        data_path=data_path,
    )

    if not _show_plan(appctx):
        warn_exit("Some targets do not resolve to a file", code=1)
