"""
Figma integration for figma_changelog.

This package contains the :class:`FigmaClient` for the Figma REST API
and the resolver that looks up display metadata for published assets.
"""

from .client import FigmaClient, FigmaError  # noqa: F401
from .resolver import AssetKind, EnrichmentRecord, resolve_change_set, resolve_metadata  # noqa: F401
