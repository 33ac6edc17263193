"""
Version control integration for figma_changelog.

This package contains the :class:`GitHubClient` used to commit the
updated changelog and helpers for reading it from the checkout.
"""

from .github_client import GitHubClient, GitHubError  # noqa: F401
from .workspace import ChangelogError, read_changelog  # noqa: F401
