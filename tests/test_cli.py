import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dbinit.cli import cli
from dbinit.cli.common import context

USERS_DDL = "CREATE TABLE IF NOT EXISTS users (id INT)"
USERS_DATA = "INSERT INTO users (id) VALUES (1)"

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    (tmp_path / "definitions" / "app" / "tables").mkdir(parents=True)
    (tmp_path / "definitions" / "app" / "tables" / "users.sql").write_text(USERS_DDL)
    (tmp_path / "initial-data" / "app").mkdir(parents=True)
    (tmp_path / "initial-data" / "app" / "users.sql").write_text(USERS_DATA)

    path = tmp_path / "dbinit.json"
    path.write_text(
        json.dumps(
            {
                "connection": {"host": "db.local", "user": "root"},
                "definitions": ["app/tables/users"],
                "initial_data": ["app/users"],
            }
        )
    )
    return path


def test_run_applies_both_phases(monkeypatch, spy_executor, config_path: Path):
    executor = spy_executor(affected={USERS_DATA: 1})
    monkeypatch.setattr(context, "open_executor", lambda settings: executor)

    result = runner.invoke(cli.app, ["run", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "1 objects created" in result.output
    assert "1 tables initialized" in result.output
    assert result.output.index("objects created") < result.output.index(
        "tables initialized"
    )
    assert "Script end" in result.output
    assert "Config" in result.output
    assert executor.closed == 1


def test_run_exits_non_zero_on_old_server(monkeypatch, spy_executor, config_path: Path):
    executor = spy_executor(version="10.5.9")
    monkeypatch.setattr(context, "open_executor", lambda settings: executor)

    result = runner.invoke(cli.app, ["run", str(config_path), "--min-version", "11"])

    assert result.exit_code == 1
    assert "too old" in result.output
    assert executor.statements() == []
    assert executor.closed == 1


def test_run_host_override_from_env(monkeypatch, spy_executor, config_path: Path):
    seen = []

    def _open(settings):
        seen.append(settings.host)
        return spy_executor()

    monkeypatch.setattr(context, "open_executor", _open)
    monkeypatch.setenv("DBINIT_HOST", "override.local")

    result = runner.invoke(cli.app, ["run", str(config_path)])

    assert result.exit_code == 0, result.output
    assert seen == ["override.local"]


def test_run_dry_run_does_not_connect(monkeypatch, config_path: Path):
    def _open(settings):
        raise AssertionError("dry run must not connect")

    monkeypatch.setattr(context, "open_executor", _open)

    result = runner.invoke(cli.app, ["run", str(config_path), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "Dry-run enabled" in result.output


def test_run_missing_config_exits_with_usage_code(tmp_path: Path):
    result = runner.invoke(cli.app, ["run", str(tmp_path / "missing.json")])

    assert result.exit_code == 2


def test_plan_flags_missing_files(config_path: Path):
    (config_path.parent / "initial-data" / "app" / "users.sql").unlink()

    result = runner.invoke(cli.app, ["plan", str(config_path)])

    assert result.exit_code == 1
    assert "Some targets do not resolve" in result.output
