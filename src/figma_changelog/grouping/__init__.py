"""
Grouping logic for design changes.

This package classifies a change set into the report model and groups
component variants by their component set. See
:mod:`figma_changelog.grouping.change_classifier` and
:mod:`figma_changelog.grouping.group_model` for details.
"""

from .change_classifier import classify_change_set, group_components  # noqa: F401
from .group_model import ComponentChange, GroupedEntry, Report, StyleChange  # noqa: F401
