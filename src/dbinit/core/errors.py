"""Exception hierarchy for database initialization.

Errors fall into two groups. Subclasses of FatalError abort the whole run and
are only turned into process exits at the CLI boundary. Everything else is
scoped to a single target: the appliers catch it, record a failed or skipped
result for that target and move on to the next one.
"""


class DbInitError(RuntimeError):
    """Base class for all db-init errors."""


class FatalError(DbInitError):
    """Raised when the run cannot continue."""


class ConfigError(FatalError):
    """Raised when the run configuration is missing or malformed."""


class ExecutorError(FatalError):
    """Raised when the database executor cannot open or run a statement.

    Opening the pool is fatal. Statement failures are caught per target.
    """


class VersionError(FatalError):
    """Raised when the server version is below the required major version."""


class InvalidDatabaseNameError(FatalError):
    """Raised when a definition target names a database containing whitespace."""


class BlobReadError(DbInitError):
    """Raised when a target's SQL file cannot be read."""


class InvalidTargetError(DbInitError):
    """Raised when a target string does not have the expected shape."""


class UnknownObjectTypeError(DbInitError):
    """Raised when a definition target's category is not recognized."""
