"""In-memory script source, mainly for tests and generated scripts."""

from __future__ import annotations

from typing import Mapping

from .base import ScriptDirectoryNotFoundError, ScriptEntry, ScriptSourceError, normalize_path


class MemoryScriptSource:
    """Script source backed by a mapping of path to content.

    Directories are implied by the file paths.

    Example:
        source = MemoryScriptSource({
            "schema/v0.0.1.sql": "CREATE TABLE t (id INT);",
        })
        source.list_entries("schema")  # [ScriptEntry("v0.0.1.sql", True)]
    """

    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        for path, content in (files or {}).items():
            self.write(path, content)

    def write(self, path: str, content: str | bytes) -> None:
        """Add or replace a file."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._files[normalize_path(path)] = content

    def remove(self, path: str) -> None:
        """Remove a file if present."""
        self._files.pop(normalize_path(path), None)

    def list_entries(self, path: str) -> list[ScriptEntry]:
        """List files and implied subdirectories of ``path``."""
        directory = normalize_path(path)
        if directory in self._files:
            raise ScriptSourceError(path, "not a directory")

        prefix = f"{directory}/" if directory else ""
        entries: dict[str, ScriptEntry] = {}
        for file_path in self._files:
            if not file_path.startswith(prefix):
                continue
            head, sep, _ = file_path[len(prefix):].partition("/")
            entries.setdefault(head, ScriptEntry(name=head, is_file=not sep))

        if not entries and directory:
            raise ScriptDirectoryNotFoundError(path)
        return [entries[name] for name in sorted(entries)]

    def read_file(self, path: str) -> bytes:
        """Return the stored bytes of a file."""
        try:
            return self._files[normalize_path(path)]
        except KeyError:
            raise ScriptSourceError(path, "file does not exist") from None
