"""Base protocol and types for script sources.

A script source is a read-only file tree that supplies migration scripts.
Sources implement the ScriptSource protocol structurally: they only need
``list_entries`` and ``read_file``, no base class is required.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from sqlshift.core.exceptions import SQLShiftError


# =============================================================================
# Exceptions
# =============================================================================


class ScriptSourceError(SQLShiftError):
    """Base exception for script source operations."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ScriptDirectoryNotFoundError(ScriptSourceError):
    """Requested directory does not exist in the source."""

    def __init__(self, path: str):
        super().__init__(path, "directory does not exist")


# =============================================================================
# Data Types
# =============================================================================


@dataclass(frozen=True)
class ScriptEntry:
    """A directory entry listed by a script source.

    Attributes:
        name: Entry name without its directory.
        is_file: True for regular files.
    """

    name: str
    is_file: bool = True


def join_path(base_dir: str, name: str) -> str:
    """Join a source-relative directory and an entry name."""
    base_dir = normalize_path(base_dir)
    if not base_dir:
        return name
    return posixpath.join(base_dir, name)


def normalize_path(path: str) -> str:
    """Normalize a source-relative path to ``a/b`` form, ``""`` for root."""
    path = path.replace("\\", "/").strip("/")
    if not path:
        return ""
    path = posixpath.normpath(path)
    return "" if path == "." else path


# =============================================================================
# Protocol Definition
# =============================================================================


@runtime_checkable
class ScriptSource(Protocol):
    """Protocol defining the interface for script sources.

    Example implementation:

        class DictSource:
            def __init__(self, files: dict[str, bytes]):
                self._files = files

            def list_entries(self, path: str) -> list[ScriptEntry]:
                return [ScriptEntry(name) for name in self._files]

            def read_file(self, path: str) -> bytes:
                return self._files[path]
    """

    def list_entries(self, path: str) -> list[ScriptEntry]:
        """List the entries of a directory.

        Args:
            path: Source-relative directory path.

        Returns:
            Entries directly inside the directory.

        Raises:
            ScriptDirectoryNotFoundError: If the directory does not exist.
            ScriptSourceError: If listing fails for any other reason.
        """
        ...

    def read_file(self, path: str) -> bytes:
        """Read the full content of a file.

        Args:
            path: Source-relative file path.

        Returns:
            Raw file bytes.

        Raises:
            ScriptSourceError: If the file cannot be read.
        """
        ...
