"""
Concurrent metadata lookups for published assets.

Every unique asset key is looked up once, all lookups for one asset kind
run concurrently, and a failed lookup only degrades that asset: it
resolves to an :class:`EnrichmentRecord` with no node id and the error
message recorded. There are no retries.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from figma_changelog.figma.client import FigmaClient, FigmaError
from figma_changelog.webhook.payload import ChangeSet


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_MAX_WORKERS = 8


class AssetKind(Enum):
    COMPONENT = "component"
    STYLE = "style"


@dataclass(frozen=True)
class EnrichmentRecord:
    """Display metadata for one asset.

    Attributes
    ----------
    node_id : Optional[str]
        Node id of the asset inside the library file, used for deep links.
    set_name : Optional[str]
        Name of the containing component set (components only).
    error : Optional[str]
        Set when the lookup failed; the other fields are then ``None``.
    """

    node_id: Optional[str] = None
    set_name: Optional[str] = None
    error: Optional[str] = None


def _component_set_name(meta: Mapping[str, Any]) -> Optional[str]:
    # Current snake_case field first, then the legacy camelCase one.
    frame = meta.get("containing_frame")
    if not isinstance(frame, dict):
        return None
    for field_name in ("containing_component_set", "containingComponentSet"):
        component_set = frame.get(field_name)
        if isinstance(component_set, dict):
            name = component_set.get("name")
            if isinstance(name, str) and name:
                return name
    return None


def extract_enrichment(response: Mapping[str, Any]) -> EnrichmentRecord:
    """Build an :class:`EnrichmentRecord` from a Figma metadata response."""
    meta = response.get("meta")
    if not isinstance(meta, dict):
        return EnrichmentRecord()
    node_id = meta.get("node_id")
    return EnrichmentRecord(
        node_id=node_id if isinstance(node_id, str) and node_id else None,
        set_name=_component_set_name(meta),
    )


def _lookup(client: FigmaClient, key: str, kind: AssetKind) -> EnrichmentRecord:
    fetch = client.get_component if kind is AssetKind.COMPONENT else client.get_style
    try:
        return extract_enrichment(fetch(key))
    except FigmaError as exc:
        logger.warning("Metadata lookup failed for %s %s: %s", kind.value, key, exc)
        return EnrichmentRecord(error=str(exc))


def resolve_metadata(
    client: FigmaClient,
    keys: Iterable[str],
    kind: AssetKind,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Dict[str, EnrichmentRecord]:
    """Look up metadata for every unique key concurrently.

    Parameters
    ----------
    client : FigmaClient
        Client used for the lookups.
    keys : Iterable[str]
        Asset keys; duplicates are looked up once.
    kind : AssetKind
        Whether the keys name components or styles.
    max_workers : int, optional
        Upper bound on concurrent requests.

    Returns
    -------
    Dict[str, EnrichmentRecord]
        One record per unique key, in first-seen key order. Failed
        lookups carry ``error`` instead of metadata.
    """
    unique_keys = list(dict.fromkeys(keys))
    if not unique_keys:
        return {}

    results: Dict[str, EnrichmentRecord] = {}
    with ThreadPoolExecutor(max_workers=min(max_workers, len(unique_keys))) as pool:
        futures = {key: pool.submit(_lookup, client, key, kind) for key in unique_keys}
        for key, future in futures.items():
            results[key] = future.result()

    failed = sum(1 for record in results.values() if record.error)
    logger.info(
        "Fetched %d %s metas (%d failed)", len(results), kind.value, failed
    )
    return results


def resolve_change_set(
    client: FigmaClient,
    change_set: ChangeSet,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Tuple[Dict[str, EnrichmentRecord], Dict[str, EnrichmentRecord]]:
    """Resolve metadata for the created and modified assets of a change set.

    Deleted assets no longer exist in the library and are not looked up.

    Returns
    -------
    Tuple[Dict[str, EnrichmentRecord], Dict[str, EnrichmentRecord]]
        Component metadata and style metadata, keyed by asset key.
    """
    component_keys = [
        asset.key
        for asset in change_set.created_components + change_set.modified_components
    ]
    style_keys = [
        asset.key for asset in change_set.created_styles + change_set.modified_styles
    ]
    component_meta = resolve_metadata(
        client, component_keys, AssetKind.COMPONENT, max_workers=max_workers
    )
    style_meta = resolve_metadata(client, style_keys, AssetKind.STYLE, max_workers=max_workers)
    return component_meta, style_meta
