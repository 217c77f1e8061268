"""Package resource script source.

Reads scripts shipped inside an importable Python package, so migrations can
be embedded in the application distribution.
"""

from __future__ import annotations

from importlib import resources
from importlib.resources.abc import Traversable

from .base import ScriptDirectoryNotFoundError, ScriptEntry, ScriptSourceError, normalize_path


class PackageScriptSource:
    """Script source over the resources of an importable package.

    Example:
        source = PackageScriptSource("myapp")
        source.list_entries("schema/svc")
    """

    def __init__(self, package: str) -> None:
        """Initialize package source.

        Args:
            package: Dotted name of the package holding the scripts.
        """
        self.package = package

    def _resolve(self, path: str) -> Traversable:
        try:
            node = resources.files(self.package)
        except ModuleNotFoundError as e:
            raise ScriptSourceError(path, f"package {self.package!r} not found") from e

        rel = normalize_path(path)
        for part in rel.split("/") if rel else []:
            node = node.joinpath(part)
        return node

    def list_entries(self, path: str) -> list[ScriptEntry]:
        """List resources inside a package directory."""
        node = self._resolve(path)
        if not node.is_dir():
            if node.is_file():
                raise ScriptSourceError(path, "not a directory")
            raise ScriptDirectoryNotFoundError(path)

        try:
            children = sorted(node.iterdir(), key=lambda child: child.name)
        except OSError as e:
            raise ScriptSourceError(path, str(e)) from e
        return [ScriptEntry(name=child.name, is_file=child.is_file()) for child in children]

    def read_file(self, path: str) -> bytes:
        """Read a resource file."""
        node = self._resolve(path)
        try:
            return node.read_bytes()
        except OSError as e:
            raise ScriptSourceError(path, str(e)) from e
