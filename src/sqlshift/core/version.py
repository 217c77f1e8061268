"""Version ordering for migration script names.

Script names carry their version in the file name, e.g. ``v1.2.3.sql`` or
``v0.0.4_add_users.sql``. Versions are compared component-wise as integers,
so ``v1.10.sql`` sorts after ``v1.9.sql`` regardless of lexical order.

Example:
    compare_versions("v1.1.3.4.sql", "v2.0.3.sql")  # Ordering.BEFORE
    compare_versions("v2", "v1.2.3")                # Ordering.AFTER
"""

from __future__ import annotations

import functools
import posixpath
import re
from enum import IntEnum

VERSION_MARKERS = "v"
VERSION_SEPARATOR = "."

_LEADING_DIGITS = re.compile(r"^\d+")


class Ordering(IntEnum):
    """Result of comparing two versions."""

    BEFORE = -1
    EQUAL = 0
    AFTER = 1

    def inverse(self) -> "Ordering":
        """Return the ordering seen from the other operand."""
        return Ordering(-self.value)


def split_version(name: str) -> list[str]:
    """Extract the numeric version components of a script name.

    The leading path and a leading version marker are stripped, then the
    name is split on ``.``. Each component contributes its leading digits;
    the first component without leading digits ends the version, which
    drops extensions and descriptive suffixes.

    Args:
        name: Raw script name or path.

    Returns:
        Digit strings, empty if the name has no numeric version.
    """
    base = posixpath.basename(name.replace("\\", "/")).lower()
    if base[:1] in VERSION_MARKERS:
        base = base[1:]

    parts: list[str] = []
    for component in base.split(VERSION_SEPARATOR):
        match = _LEADING_DIGITS.match(component)
        if not match:
            break
        parts.append(match.group(0))
    return parts


def pad_version(parts: list[str], length: int) -> list[str]:
    """Right-pad version components with zeros up to ``length``."""
    if len(parts) >= length:
        return list(parts)
    return list(parts) + ["0"] * (length - len(parts))


def compare_versions(a: str, b: str) -> Ordering:
    """Compare two script names by version.

    Falls back to byte-wise comparison of the raw names when either name
    has no numeric version, so the function is total.

    Args:
        a: First script name.
        b: Second script name.

    Returns:
        Ordering of ``a`` relative to ``b``.
    """
    va = split_version(a)
    vb = split_version(b)

    if not va or not vb:
        return _compare_raw(a, b)

    length = max(len(va), len(vb))
    for x, y in zip(pad_version(va, length), pad_version(vb, length)):
        ix, iy = int(x), int(y)
        if ix < iy:
            return Ordering.BEFORE
        if ix > iy:
            return Ordering.AFTER
    return Ordering.EQUAL


def _compare_raw(a: str, b: str) -> Ordering:
    ba = a.encode("utf-8")
    bb = b.encode("utf-8")
    if ba < bb:
        return Ordering.BEFORE
    if ba > bb:
        return Ordering.AFTER
    return Ordering.EQUAL


def version_after(a: str, b: str) -> bool:
    """True if ``a`` is strictly after ``b``."""
    return compare_versions(a, b) is Ordering.AFTER


def version_after_or_equal(a: str, b: str) -> bool:
    """True if ``a`` is after or equal to ``b``."""
    return compare_versions(a, b) is not Ordering.BEFORE


def later_version(a: str | None, b: str | None) -> str | None:
    """Return the later of two optional names, preferring ``a`` on ties."""
    if not a:
        return b or None
    if not b:
        return a
    return b if version_after(b, a) else a


# Only a total order when every name has a version, or none does: the raw-name
# fallback makes e.g. v9.sql < 10.sql < init.sql < v9.sql.
_version_key = functools.cmp_to_key(compare_versions)


def version_sort_key(name: str) -> tuple:
    """Sort key ordering names by version, raw name breaking ties."""
    return (_version_key(name), name)
