"""Run orchestration.

Sequences the version gate, the schema phase and the initial data phase
against a single executor. The executor is opened here and closed here,
exactly once, whether the run completes or a fatal error escapes.
"""

from __future__ import annotations

from dbinit.core.blobs import BlobReader, FileBlobReader
from dbinit.core.executor import ExecutorFactory, NullReporter, Reporter
from dbinit.core.models import RunConfig, RunReport
from dbinit.core.schema import apply_schema
from dbinit.core.seed import apply_seed_data
from dbinit.core.version import check_version


def run_bootstrap(
    config: RunConfig,
    *,
    executor_factory: ExecutorFactory,
    reader: BlobReader | None = None,
    reporter: Reporter | None = None,
) -> RunReport:
    """
    Apply definitions and initial data described by `config`.

    Args:
        config: Connection settings, targets and metadata for the run.
        executor_factory: Opens the executor for `config.connection`. Raising
            ExecutorError here aborts the run before anything is applied.
        reader: Reader for SQL files. Defaults to the local file system.
        reporter: Receives phase and per-target events.

    Returns:
        RunReport with the outcome of every target.

    Raises:
        ExecutorError: If the executor could not be opened.
        VersionError: If the server is older than the required version.
        InvalidDatabaseNameError: If a definition names a malformed database.
    """
    reader = reader or FileBlobReader()
    reporter = reporter or NullReporter()
    meta = config.meta

    executor = executor_factory(config.connection)
    try:
        server_version = None
        if meta.required_major_version is not None:
            server_version = check_version(executor, meta.required_major_version)

        definitions = apply_schema(
            executor,
            reader,
            config.definitions,
            meta.definition_path,
            cache=set(),
            reporter=reporter,
        )
        initial_data = apply_seed_data(
            executor,
            reader,
            config.initial_data,
            meta.data_path,
            reporter=reporter,
        )
    finally:
        executor.close()

    return RunReport(
        server_version=server_version,
        definitions=definitions,
        initial_data=initial_data,
    )
