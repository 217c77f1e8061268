"""Create script sources from URIs.

Supported forms:
    /path/to/dir or file:///path/to/dir -> FileSystemScriptSource
    package://myapp.resources           -> PackageScriptSource
"""

from __future__ import annotations

from typing import Callable
from urllib.parse import urlparse

from loguru import logger

from .base import ScriptSource
from .filesystem import FileSystemScriptSource
from .package import PackageScriptSource

SourceFactory = Callable[[str], ScriptSource]


def _package_factory(uri: str) -> ScriptSource:
    parsed = urlparse(uri)
    return PackageScriptSource(parsed.netloc + parsed.path.replace("/", "."))


_FACTORIES: dict[str, SourceFactory] = {
    "": FileSystemScriptSource,
    "file": FileSystemScriptSource,
    "package": _package_factory,
}


def source_from_uri(uri: str) -> ScriptSource:
    """Build a script source for ``uri``.

    Args:
        uri: Bare path, ``file://`` URI or ``package://`` URI.

    Returns:
        A ScriptSource for the URI.

    Raises:
        ValueError: If the URI scheme is not supported.
    """
    scheme = urlparse(uri).scheme
    # Single letter schemes are Windows drive letters
    if len(scheme) == 1:
        scheme = ""
    factory = _FACTORIES.get(scheme)
    if factory is None:
        raise ValueError(f"Unsupported script source: {uri!r}")
    logger.debug(f"Creating script source for {uri!r}")
    return factory(uri)
