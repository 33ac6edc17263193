"""
Markdown changelog rendering.

A release section looks like::

    ## 1.3.0 - 2026-10-19

    ### 추가
    - [Primary](https://www.figma.com/file/<file_key>?node-id=10:1)

    ### 수정
    - Button *(2)*

Release dates are calendar days in Korea Standard Time (UTC+9). New
sections go directly above the most recent release.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from figma_changelog.grouping.group_model import Report
from figma_changelog.render.sections import collect_sections

KST_OFFSET = timedelta(hours=9)
RELEASE_HEADING_RE = re.compile(r"^## \d", re.MULTILINE)

ADDED_TITLE = "추가"
MODIFIED_TITLE = "수정"
DELETED_TITLE = "삭제"


def markdown_link(name: str, url: str) -> str:
    return f"[{name}]({url})"


def modified_variables_line(count: int) -> str:
    return f"수정된 변수 있음 ({count}개 미확인)"


def release_date(timestamp: Optional[datetime]) -> str:
    """Return the KST calendar day of ``timestamp`` as ``YYYY-MM-DD``."""
    if timestamp is None:
        raise ValueError("Report has no timestamp to date the release with")
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    shifted = timestamp.astimezone(timezone.utc) + KST_OFFSET
    return shifted.date().isoformat()


def render_changelog(report: Report) -> str:
    """Render the changelog section for ``report``."""
    if report.version is None:
        raise ValueError("Report has no version; build it with build_report()")
    sections = collect_sections(report, markdown_link, modified_variables_line)

    md = f"## {report.version} - {release_date(report.timestamp)}\n\n"
    blocks: List[Tuple[str, Tuple[str, ...]]] = [
        (ADDED_TITLE, sections.added),
        (MODIFIED_TITLE, sections.modified),
        (DELETED_TITLE, sections.deleted),
    ]
    for title, items in blocks:
        if items:
            lines = "\n".join(f"- {item}" for item in items)
            md += f"### {title}\n{lines}\n\n"
    return md


def update_changelog(previous: str, section: str) -> str:
    """Insert ``section`` above the first release heading of ``previous``.

    Without any release heading the section is appended after the
    existing content.
    """
    match = RELEASE_HEADING_RE.search(previous)
    if match:
        return previous[: match.start()] + section + previous[match.start():]
    return previous.rstrip() + "\n\n" + section
