"""
Access to the changelog in the CI checkout.
"""

from __future__ import annotations

import logging
from pathlib import Path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ChangelogError(Exception):
    """Raised when the changelog file cannot be read."""

    pass


def read_changelog(path: Path) -> str:
    """Return the UTF-8 content of the changelog at ``path``."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read changelog %s: %s", path, exc)
        raise ChangelogError(f"Cannot read changelog {path}: {exc}") from exc
    logger.debug("Read changelog %s (%d characters)", path, len(content))
    return content
