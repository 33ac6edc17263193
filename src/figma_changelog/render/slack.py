"""
Slack notification rendering.

The message is three Block Kit blocks: a header naming the new version
(linked to the committed changelog) and the publisher, a divider, and a
body listing the added, modified and deleted items. Each list shows at
most :data:`MAX_ITEMS` entries followed by a count of the rest.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from figma_changelog.grouping.group_model import Report
from figma_changelog.render.sections import collect_sections

MAX_ITEMS = 20
UNKNOWN_DEPLOYER = "Unknown"
NO_CHANGES_TEXT = "변경 사항 없음"

ADDED_LABEL = "🟢 *추가*"
MODIFIED_LABEL = "🟠 *수정*"
DELETED_LABEL = "🔴 *삭제*"


def slack_link(name: str, url: str) -> str:
    return f"<{url}|{name}>"


def modified_variables_item(count: int) -> str:
    return f"수정된 변수 {count}개 (미확인)"


def build_section(label: str, items: Sequence[str], limit: int = MAX_ITEMS) -> Optional[str]:
    """Format one labelled bullet list, or ``None`` if ``items`` is empty."""
    if not items:
        return None
    shown = "\n".join(f"• {item}" for item in items[:limit])
    extra = f"\n• _...외 {len(items) - limit}건_" if len(items) > limit else ""
    return f"{label}\n{shown}{extra}"


def _mrkdwn_section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def render_notification(report: Report, changelog_url: str) -> Dict[str, Any]:
    """Render the Slack webhook payload for ``report``.

    Parameters
    ----------
    report : Report
        A report carrying its new version.
    changelog_url : str
        Browser URL of the committed changelog.

    Returns
    -------
    Dict[str, Any]
        ``{"blocks": [...]}``, ready to be posted as JSON.
    """
    if report.version is None:
        raise ValueError("Report has no version; build it with build_report()")
    sections = collect_sections(report, slack_link, modified_variables_item)

    parts: List[Optional[str]] = [
        build_section(ADDED_LABEL, sections.added),
        build_section(MODIFIED_LABEL, sections.modified),
        build_section(DELETED_LABEL, sections.deleted),
    ]
    body = "\n\n".join(part for part in parts if part).strip()

    deployer = report.triggered_by or UNKNOWN_DEPLOYER
    header = f"*<{changelog_url}|{report.version}>* · {deployer}"
    return {
        "blocks": [
            _mrkdwn_section(header),
            {"type": "divider"},
            _mrkdwn_section(body or NO_CHANGES_TEXT),
        ]
    }
