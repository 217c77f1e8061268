from .base import (
    ScriptDirectoryNotFoundError,
    ScriptEntry,
    ScriptSource,
    ScriptSourceError,
    join_path,
    normalize_path,
)
from .filesystem import FileSystemScriptSource
from .memory import MemoryScriptSource
from .package import PackageScriptSource
from .registry import source_from_uri

__all__ = [
    "ScriptSourceError",
    "ScriptDirectoryNotFoundError",
    "ScriptEntry",
    "ScriptSource",
    "join_path",
    "normalize_path",
    "FileSystemScriptSource",
    "MemoryScriptSource",
    "PackageScriptSource",
    "source_from_uri",
]
