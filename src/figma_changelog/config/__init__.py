"""
Configuration loading for figma_changelog.

Provides a loader that assembles the :class:`AppConfig` passed to every
collaborator client. See :mod:`figma_changelog.config.loader` for
implementation details.
"""

from .loader import AppConfig, ConfigError, load_config, load_passcode  # noqa: F401
