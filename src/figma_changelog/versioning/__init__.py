"""
Version resolution for figma_changelog.

See :mod:`figma_changelog.versioning.semver` for the bump policy.
"""

from .semver import VersionTriple, next_version, read_current_version  # noqa: F401
