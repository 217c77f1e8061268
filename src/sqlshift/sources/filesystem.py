"""Filesystem script source.

Reads migration scripts from a directory tree on the local filesystem.
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from loguru import logger

from .base import ScriptDirectoryNotFoundError, ScriptEntry, ScriptSourceError, normalize_path


class FileSystemScriptSource:
    """Script source rooted at a local directory.

    Example:
        source = FileSystemScriptSource("/srv/app")
        for entry in source.list_entries("schema/svc"):
            print(entry.name, entry.is_file)
    """

    def __init__(self, root: Path | str) -> None:
        """Initialize filesystem source.

        Args:
            root: Root directory, or a ``file://`` URI. Source paths are
                resolved relative to it.
        """
        self._root = _path_from_uri(str(root)).resolve()

    @property
    def root(self) -> Path:
        """Get the resolved root path."""
        return self._root

    def _resolve(self, path: str) -> Path:
        rel = normalize_path(path)
        return self._root / rel if rel else self._root

    def list_entries(self, path: str) -> list[ScriptEntry]:
        """List entries of a directory below the root."""
        directory = self._resolve(path)

        if not directory.exists():
            raise ScriptDirectoryNotFoundError(path)
        if not directory.is_dir():
            raise ScriptSourceError(path, "not a directory")

        try:
            entries = [
                ScriptEntry(name=child.name, is_file=child.is_file())
                for child in sorted(directory.iterdir())
            ]
        except OSError as e:
            raise ScriptSourceError(path, str(e)) from e

        logger.debug(f"Listed {len(entries)} entries in {directory}")
        return entries

    def read_file(self, path: str) -> bytes:
        """Read a file below the root."""
        try:
            return self._resolve(path).read_bytes()
        except OSError as e:
            raise ScriptSourceError(path, str(e)) from e


def _path_from_uri(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        # file:///path/to/dir -> /path/to/dir
        return Path(unquote(parsed.path))
    return Path(uri)
