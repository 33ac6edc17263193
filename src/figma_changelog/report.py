"""
Report assembly.

:func:`build_report` classifies a change set and stamps it with the next
semantic version. The result is handed unchanged to both renderers.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional

from figma_changelog.figma.resolver import EnrichmentRecord
from figma_changelog.grouping.change_classifier import classify_change_set
from figma_changelog.grouping.group_model import Report
from figma_changelog.versioning.semver import VersionTriple, next_version
from figma_changelog.webhook.payload import ChangeSet


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def build_report(
    change_set: ChangeSet,
    current_version: VersionTriple,
    component_meta: Mapping[str, EnrichmentRecord],
    style_meta: Mapping[str, EnrichmentRecord],
    received_at: Optional[datetime] = None,
) -> Report:
    """Classify ``change_set`` and attach the version following ``current_version``."""
    report = classify_change_set(change_set, component_meta, style_meta, received_at)
    new_version = next_version(current_version, report.has_added, report.has_deleted)
    logger.info(
        "New version: %s (added=%s, deleted=%s)",
        new_version,
        report.has_added,
        report.has_deleted,
    )
    return replace(report, previous_version=str(current_version), version=str(new_version))
