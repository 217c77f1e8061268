"""Script discovery and selection.

Turns a directory listing plus the last applied script into the ordered list
of scripts a migration run has to look at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from ..core.exceptions import DiscoveryError, ScriptReadError
from ..core.types import Script
from ..core.version import Ordering, compare_versions, later_version, version_sort_key
from ..sources.base import ScriptDirectoryNotFoundError, ScriptEntry, ScriptSourceError, join_path

if TYPE_CHECKING:
    from ..app.protocols import LoggerProtocol
    from ..core.config import MigrateConfig
    from ..sources.base import ScriptSource


def resolve_baseline(last_applied: str | None, start_version: str | None) -> str | None:
    """Pick the effective baseline.

    The later of the last applied script and the caller-supplied starting
    version; whichever is present if only one is; None for a fresh install.
    """
    return later_version(last_applied, start_version)


@dataclass
class Selection:
    """Ordered work list for one migration run.

    Attributes:
        baseline: Effective baseline, None when every script is a candidate.
        scripts: Candidate scripts in ascending version order.
        baseline_script: Name of the script whose version equals the
            baseline. It is only diffed for newly added statements.
    """

    baseline: str | None
    scripts: list[Script] = field(default_factory=list)
    baseline_script: str | None = None

    def is_baseline(self, script: Script) -> bool:
        """Whether ``script`` is kept only for statement diffing."""
        return self.baseline_script is not None and script.name == self.baseline_script

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.scripts]


class ScriptSelector:
    """Discovers scripts in a source and selects the ones still to apply.

    Example:
        selector = ScriptSelector(source, MigrateConfig(app="svc", base_dir="schema"))
        selection = selector.select(last_applied="v0.0.2.sql")
        for script in selection.scripts:
            print(script.name, len(script.statements))
    """

    def __init__(
        self,
        source: "ScriptSource",
        config: "MigrateConfig",
        log: "LoggerProtocol" = logger,
    ):
        """Initialize the selector.

        Args:
            source: Script source to read from.
            config: Invocation settings (base dir, suffixes, exclusions).
            log: Logger for progress narration.
        """
        self.source = source
        self.config = config
        self.log = log

    def discover(self) -> list[ScriptEntry]:
        """List script files in the base directory, version ordered.

        A missing base directory means there is nothing to migrate.

        Raises:
            DiscoveryError: If the directory exists but cannot be listed.
        """
        base_dir = self.config.base_dir
        try:
            entries = self.source.list_entries(base_dir)
        except ScriptDirectoryNotFoundError:
            self.log.info(f"Script directory {base_dir!r} does not exist, nothing to migrate")
            return []
        except ScriptSourceError as e:
            raise DiscoveryError(base_dir, e.reason) from e

        scripts = []
        for entry in entries:
            name = entry.name.lower()
            if not entry.is_file or not name.endswith(tuple(self.config.suffixes)):
                continue
            if self.config.is_excluded(name):
                self.log.debug(f"Skipping excluded script {entry.name}")
                continue
            scripts.append(entry)

        scripts.sort(key=lambda e: version_sort_key(e.name.lower()))
        self.log.debug(f"Discovered {len(scripts)} script(s) in {base_dir!r}")
        return scripts

    def latest(self, entries: list[ScriptEntry]) -> ScriptEntry | None:
        """Version-latest entry of an already sorted listing."""
        return entries[-1] if entries else None

    def partition(
        self, entries: list[ScriptEntry], baseline: str | None
    ) -> tuple[list[ScriptEntry], ScriptEntry | None]:
        """Split a sorted listing against the baseline.

        Returns:
            Entries strictly after the baseline, and the entry whose version
            equals the baseline when statement tracking is enabled.
        """
        if baseline is None:
            return list(entries), None

        after: list[ScriptEntry] = []
        equal: ScriptEntry | None = None
        for entry in entries:
            order = compare_versions(entry.name.lower(), baseline)
            if order is Ordering.AFTER:
                after.append(entry)
            elif order is Ordering.EQUAL and self.config.track_statements and equal is None:
                equal = entry
            else:
                self.log.debug(f"Script {entry.name} is not after {baseline}, already applied")
        return after, equal

    def load(self, entry: ScriptEntry) -> Script:
        """Read and split a script.

        Raises:
            ScriptReadError: If the content cannot be read or decoded.
        """
        path = join_path(self.config.base_dir, entry.name)
        try:
            content = self.source.read_file(path).decode("utf-8")
        except ScriptSourceError as e:
            raise ScriptReadError(path, e.reason) from e
        except UnicodeDecodeError as e:
            raise ScriptReadError(path, f"not valid UTF-8: {e}") from e
        return Script.from_content(entry.name, path, content)

    def select(self, last_applied: str | None) -> Selection:
        """Compute the ordered candidate scripts.

        Args:
            last_applied: Script name of the latest successful history
                record, None if there is none.

        Returns:
            Selection with the baseline and loaded candidate scripts.
        """
        baseline = resolve_baseline(last_applied, self.config.start_version)
        self.log.debug(
            f"Baseline {baseline!r} (last applied: {last_applied!r}, "
            f"start version: {self.config.start_version!r})"
        )

        after, equal = self.partition(self.discover(), baseline)
        ordered = ([equal] if equal else []) + after

        return Selection(
            baseline=baseline,
            scripts=[self.load(entry) for entry in ordered],
            baseline_script=equal.name.lower() if equal else None,
        )
