import pytest

from dbinit.core.errors import ExecutorError, InvalidDatabaseNameError, VersionError
from dbinit.core.models import ConnectionSettings, RunConfig, RunMeta
from dbinit.core.runner import run_bootstrap

USERS_DDL = "CREATE TABLE IF NOT EXISTS users (id INT)"
USERS_DATA = "INSERT INTO app.users (id) VALUES (1)"


@pytest.fixture
def reader(memory_reader):
    return memory_reader(
        {
            "defs/app/tables/users.sql": USERS_DDL,
            "data/app/users.sql": USERS_DATA,
            "defs/bad db/tables/x.sql": USERS_DDL,
        }
    )


def _config(definitions=("app/tables/users",), data=("app/users",), min_major=None):
    return RunConfig(
        connection=ConnectionSettings(host="db.local"),
        definitions=tuple(definitions),
        initial_data=tuple(data),
        meta=RunMeta(
            definition_path="defs", data_path="data", required_major_version=min_major
        ),
    )


def test_run_bootstrap_runs_both_phases_and_closes(spy_executor, reader, recording_reporter):
    executor = spy_executor()
    seen: list[ConnectionSettings] = []

    def factory(settings):
        seen.append(settings)
        return executor

    report = run_bootstrap(
        _config(min_major=10),
        executor_factory=factory,
        reader=reader,
        reporter=recording_reporter,
    )

    assert seen[0].host == "db.local"
    assert report.server_version == "10.11.2-MariaDB"
    assert report.definitions.count == 1
    assert report.initial_data.count == 1
    assert executor.closed == 1
    phases = [e for e in recording_reporter.events if e[0] != "target"]
    assert phases == [
        ("start", "definitions"),
        ("finish", "definitions"),
        ("start", "initial data"),
        ("finish", "initial data"),
    ]


def test_run_bootstrap_skips_version_query_without_minimum(spy_executor, reader):
    executor = spy_executor()

    report = run_bootstrap(_config(), executor_factory=lambda _: executor, reader=reader)

    assert report.server_version is None
    assert not any(c.startswith("SELECT VERSION()") for c in executor.calls)


def test_run_bootstrap_aborts_on_old_server(spy_executor, reader):
    executor = spy_executor(version="10.5.9")

    with pytest.raises(VersionError):
        run_bootstrap(_config(min_major=11), executor_factory=lambda _: executor, reader=reader)

    assert executor.calls == ["SELECT VERSION() AS version"]
    assert reader.reads == []
    assert executor.closed == 1


def test_run_bootstrap_aborts_on_invalid_database_name(spy_executor, reader):
    executor = spy_executor()

    with pytest.raises(InvalidDatabaseNameError):
        run_bootstrap(
            _config(definitions=("bad db/tables/x", "app/tables/users")),
            executor_factory=lambda _: executor,
            reader=reader,
        )

    assert executor.calls == []
    assert executor.closed == 1


def test_run_bootstrap_propagates_pool_failure(reader):
    def factory(settings):
        raise ExecutorError("Could not create database connection pool")

    with pytest.raises(ExecutorError):
        run_bootstrap(_config(), executor_factory=factory, reader=reader)

    assert reader.reads == []
