"""
Item texts shared by both renderers.

Both the changelog and the Slack message list the same items in the same
order: variables, then styles, then grouped components. Only the link
syntax and the wording of the modified-variables summary differ, so each
renderer passes those in and formats the resulting :class:`Sections`
its own way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from figma_changelog.grouping.group_model import GroupedEntry, Report

FIGMA_FILE_URL = "https://www.figma.com/file/{file_key}"

# (name, url) -> linked text
LinkFormatter = Callable[[str, str], str]


@dataclass(frozen=True)
class Sections:
    added: Tuple[str, ...] = ()
    modified: Tuple[str, ...] = ()
    deleted: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.deleted)


def figma_node_url(file_key: str, node_id: str) -> str:
    return f"{FIGMA_FILE_URL.format(file_key=file_key)}?node-id={node_id}"


def variant_suffix(entry: GroupedEntry) -> str:
    return f" *({entry.variant_count})*" if entry.variant_count > 1 else ""


def collect_sections(
    report: Report,
    link: LinkFormatter,
    modified_variables_text: Callable[[int], str],
) -> Sections:
    """Build the added, modified and deleted item texts of ``report``.

    Styles and components are linked to their node in the library file
    when a node id was resolved. Deleted items are never linked.
    """

    def linked(name: str, node_id: Optional[str]) -> str:
        return link(name, figma_node_url(report.file_key, node_id)) if node_id else name

    added: List[str] = [v.name for v in report.variables_added]
    added += [linked(s.name, s.node_id) for s in report.styles_added]
    added += [linked(c.name, c.node_id) + variant_suffix(c) for c in report.components_added]

    modified: List[str] = []
    if report.modified_variable_count > 0:
        modified.append(modified_variables_text(report.modified_variable_count))
    modified += [linked(s.name, s.node_id) for s in report.styles_modified]
    modified += [
        linked(c.name, c.node_id) + variant_suffix(c) for c in report.components_modified
    ]

    deleted: List[str] = [v.name for v in report.variables_deleted]
    deleted += [s.name for s in report.styles_deleted]
    deleted += [c.name + variant_suffix(c) for c in report.components_deleted]

    return Sections(added=tuple(added), modified=tuple(modified), deleted=tuple(deleted))
