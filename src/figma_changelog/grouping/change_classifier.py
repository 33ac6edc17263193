"""
Classification of a change set into the report model.

Assets are partitioned by change type (added, modified, deleted) and
asset kind (variable, style, component). Styles and components are
joined with the metadata fetched from Figma, and component variants are
collapsed by their containing component set. The classifier is
deterministic: it reads nothing but its arguments.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from figma_changelog.figma.resolver import EnrichmentRecord
from figma_changelog.grouping.group_model import (
    ComponentChange,
    GroupedEntry,
    Report,
    StyleChange,
)
from figma_changelog.webhook.payload import Asset, ChangeSet


_EMPTY = EnrichmentRecord()


def group_components(
    changes: Iterable[Union[ComponentChange, GroupedEntry]],
) -> Tuple[GroupedEntry, ...]:
    """Collapse component variants sharing a grouping key.

    Parameters
    ----------
    changes : Iterable[ComponentChange | GroupedEntry]
        Variants (or already grouped entries) in delivery order.

    Returns
    -------
    Tuple[GroupedEntry, ...]
        One entry per grouping key, ordered by first occurrence. The
        first member's node id is kept; variant counts are summed, so
        grouping an already grouped sequence returns it unchanged.
    """
    groups: Dict[str, GroupedEntry] = {}
    for change in changes:
        key = change.grouping_key
        existing = groups.get(key)
        if existing is None:
            groups[key] = GroupedEntry(
                name=key, node_id=change.node_id, variant_count=change.variant_count
            )
        else:
            groups[key] = replace(
                existing, variant_count=existing.variant_count + change.variant_count
            )
    return tuple(groups.values())


def _styles(
    assets: Iterable[Asset], meta: Optional[Mapping[str, EnrichmentRecord]]
) -> Tuple[StyleChange, ...]:
    if meta is None:
        return tuple(StyleChange(name=a.name, key=a.key) for a in assets)
    return tuple(
        StyleChange(name=a.name, key=a.key, node_id=meta.get(a.key, _EMPTY).node_id)
        for a in assets
    )


def _components(
    assets: Iterable[Asset], meta: Mapping[str, EnrichmentRecord]
) -> Tuple[ComponentChange, ...]:
    changes = []
    for asset in assets:
        record = meta.get(asset.key, _EMPTY)
        changes.append(
            ComponentChange(
                name=asset.name,
                key=asset.key,
                node_id=record.node_id,
                set_name=record.set_name or asset.name,
            )
        )
    return tuple(changes)


def classify_change_set(
    change_set: ChangeSet,
    component_meta: Mapping[str, EnrichmentRecord],
    style_meta: Mapping[str, EnrichmentRecord],
    received_at: Optional[datetime] = None,
) -> Report:
    """Build the report model for a change set.

    Parameters
    ----------
    change_set : ChangeSet
        The normalized webhook content.
    component_meta, style_meta : Mapping[str, EnrichmentRecord]
        Metadata keyed by asset key. Missing keys count as unresolved.
    received_at : Optional[datetime]
        Time to report when the webhook carries no timestamp.

    Returns
    -------
    Report
        The classified report, without a version.
    """
    components_added = _components(change_set.created_components, component_meta)
    components_modified = _components(change_set.modified_components, component_meta)
    # Deleted components no longer exist in the library; group by their own name.
    components_deleted = tuple(
        ComponentChange(name=a.name, key=a.key, set_name=a.name)
        for a in change_set.deleted_components
    )

    has_added = bool(
        change_set.created_variables
        or change_set.created_styles
        or change_set.created_components
    )
    has_deleted = bool(
        change_set.deleted_variables
        or change_set.deleted_styles
        or change_set.deleted_components
    )

    return Report(
        file_key=change_set.file_key,
        timestamp=change_set.timestamp or received_at,
        triggered_by=change_set.triggered_by,
        variables_added=change_set.created_variables,
        variables_deleted=change_set.deleted_variables,
        modified_variable_count=len(change_set.modified_variables),
        styles_added=_styles(change_set.created_styles, style_meta),
        styles_modified=_styles(change_set.modified_styles, style_meta),
        styles_deleted=_styles(change_set.deleted_styles, None),
        components_added=group_components(components_added),
        components_modified=group_components(components_modified),
        components_deleted=group_components(components_deleted),
        has_added=has_added,
        has_deleted=has_deleted,
    )
