"""Run configuration loading.

The configuration is a JSON document with a `connection` section, ordered
`definitions` and `initial_data` target lists and an optional `meta` section.
Relative file roots in `meta` are resolved against the directory holding the
config file, so a config can be run from any working directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from dbinit.core.errors import ConfigError
from dbinit.core.models import (
    DEFAULT_DATA_PATH,
    DEFAULT_DEFINITION_PATH,
    ConnectionSettings,
    RunConfig,
    RunMeta,
)

_CONNECTION_INTS = ("port", "pool_size", "connect_timeout")


def _target_list(raw: Mapping[str, Any], key: str) -> tuple[str, ...]:
    """Return a list of target strings from the config, validating its type."""
    value = raw.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"`{key}` must be a list of target strings.")
    return tuple(value)


def _resolve_root(value: str | None, default: str, base_dir: Path) -> str:
    """Anchor a relative file root at the config file's directory."""
    path = Path(value or default).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def build_connection(
    raw: Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
    *,
    required: bool = True,
) -> ConnectionSettings:
    """
    Build connection settings from the config section plus CLI/env overrides.

    Overrides win over file values; None overrides are ignored. With
    `required=False` a missing host is tolerated (for offline commands).

    Raises:
        ConfigError: If no host is configured or a numeric field is invalid.
    """
    merged: dict[str, Any] = dict(raw or {})
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    if not merged.get("host"):
        if required:
            raise ConfigError("No database access provided (missing connection host).")
        merged["host"] = ""

    for key in _CONNECTION_INTS:
        if key in merged and merged[key] is not None:
            try:
                merged[key] = int(merged[key])
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"connection.{key} must be an integer.") from exc

    known = set(ConnectionSettings.__dataclass_fields__)
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigError(f"Unknown connection option(s): {', '.join(unknown)}")

    return ConnectionSettings(**merged)


def build_meta(
    raw: Mapping[str, Any] | None,
    base_dir: Path,
    *,
    definition_path: str | None = None,
    data_path: str | None = None,
    required_major_version: int | None = None,
) -> RunMeta:
    """Build run metadata, applying overrides and resolving file roots."""
    raw = raw or {}
    if not isinstance(raw, Mapping):
        raise ConfigError("`meta` must be an object.")

    version = required_major_version
    if version is None:
        version = raw.get("required_major_version")
    if isinstance(version, float) and version.is_integer():
        version = int(version)
    if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
        raise ConfigError("meta.required_major_version must be a whole number.")

    return RunMeta(
        definition_path=_resolve_root(
            definition_path or raw.get("definition_path"),
            DEFAULT_DEFINITION_PATH,
            base_dir,
        ),
        data_path=_resolve_root(
            data_path or raw.get("data_path"), DEFAULT_DATA_PATH, base_dir
        ),
        required_major_version=version,
    )


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read and decode the JSON config file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file {path} does not exist.") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object.")
    return payload


def load_config(
    path: str | Path,
    *,
    connection_overrides: Mapping[str, Any] | None = None,
    definition_path: str | None = None,
    data_path: str | None = None,
    required_major_version: int | None = None,
    require_connection: bool = True,
) -> RunConfig:
    """
    Load a RunConfig from a JSON file.

    Args:
        path: Location of the config file.
        connection_overrides: Connection values that replace file values
            (typically from CLI options or environment variables).
        definition_path: Override for `meta.definition_path`.
        data_path: Override for `meta.data_path`.
        required_major_version: Override for `meta.required_major_version`.
        require_connection: If False, a missing connection host is allowed.

    Raises:
        ConfigError: If the file is missing, malformed or lacks a connection.
    """
    path = Path(path)
    raw = read_config_file(path)

    connection_raw = raw.get("connection")
    if connection_raw is not None and not isinstance(connection_raw, Mapping):
        raise ConfigError("`connection` must be an object.")

    return RunConfig(
        connection=build_connection(
            connection_raw, connection_overrides, required=require_connection
        ),
        definitions=_target_list(raw, "definitions"),
        initial_data=_target_list(raw, "initial_data"),
        meta=build_meta(
            raw.get("meta"),
            path.resolve().parent,
            definition_path=definition_path,
            data_path=data_path,
            required_major_version=required_major_version,
        ),
    )
