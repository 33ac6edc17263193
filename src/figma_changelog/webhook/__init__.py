"""
Webhook handling for figma_changelog.

See :mod:`figma_changelog.webhook.payload` for how library publish
events are authenticated and flattened into a :class:`ChangeSet`.
"""

from .payload import Asset, ChangeSet, PayloadError, normalize_payload  # noqa: F401
