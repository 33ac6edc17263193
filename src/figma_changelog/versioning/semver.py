"""
Semantic versioning of the design system changelog.

The current version is the first ``## <major>.<minor>.<patch>`` heading
of the changelog. The next version depends only on whether anything was
added or deleted:

* from 1.0.0 on, deletions bump the major version, additions the minor
  version, and anything else the patch version;
* before 1.0.0, additions and deletions both bump the minor version and
  anything else the patch version.

Modifications alone never raise the bump above patch.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

VERSION_HEADING_RE = re.compile(r"^## (\d+)\.(\d+)\.(\d+)", re.MULTILINE)
_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True, order=True)
class VersionTriple:
    major: int = 0
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: Optional[str]) -> "VersionTriple":
        """Parse ``"major.minor.patch"``; anything else yields ``0.0.0``."""
        if not text:
            return cls()
        match = _VERSION_RE.match(text.strip())
        if not match:
            return cls()
        return cls(*(int(part) for part in match.groups()))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def read_current_version(changelog: str) -> VersionTriple:
    """Return the version of the first version heading in ``changelog``."""
    match = VERSION_HEADING_RE.search(changelog)
    if not match:
        return VersionTriple()
    return VersionTriple(*(int(part) for part in match.groups()))


def next_version(previous: VersionTriple, has_added: bool, has_deleted: bool) -> VersionTriple:
    """Compute the version following ``previous``.

    Parameters
    ----------
    previous : VersionTriple
        The current version.
    has_added : bool
        Whether any variable, style or component was added.
    has_deleted : bool
        Whether any variable, style or component was deleted.

    Returns
    -------
    VersionTriple
        The bumped version.
    """
    major, minor, patch = previous.major, previous.minor, previous.patch
    if major >= 1:
        if has_deleted:
            return VersionTriple(major + 1, 0, 0)
        if has_added:
            return VersionTriple(major, minor + 1, 0)
        return VersionTriple(major, minor, patch + 1)
    # Breaking changes do not leave the 0.x series.
    if has_added or has_deleted:
        return VersionTriple(0, minor + 1, 0)
    return VersionTriple(0, minor, patch + 1)
