"""SQL file access for targets."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from dbinit.core.errors import BlobReadError


class BlobReader(Protocol):
    """Interface for reading a target's SQL text."""

    def read(self, path: Path) -> str:
        """Return the file contents or raise BlobReadError."""
        ...


class FileBlobReader:
    """Reads SQL files from the local file system as UTF-8 text."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, path: Path) -> str:
        """Read a SQL file, wrapping missing files and I/O errors."""
        try:
            return Path(path).read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise BlobReadError(f"{path} does not exist") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise BlobReadError(f"Could not read {path}: {exc}") from exc
