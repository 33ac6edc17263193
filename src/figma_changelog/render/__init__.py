"""
Rendering of reports.

One :class:`~figma_changelog.grouping.group_model.Report` is projected
into a markdown changelog section (:mod:`.changelog`) and a Slack
message (:mod:`.slack`).
"""

from .changelog import render_changelog, update_changelog  # noqa: F401
from .slack import render_notification  # noqa: F401
