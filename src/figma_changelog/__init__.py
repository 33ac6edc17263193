"""
Top-level package for figma_changelog.

This package turns a Figma library publish webhook into a versioned
changelog entry and a Slack notification. The main CLI entry point
lives in the ``figma_changelog.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
