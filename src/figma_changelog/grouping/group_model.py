"""
Data models for classified design changes.

A :class:`ComponentChange` is one published component variant with its
metadata attached; variants sharing a grouping key collapse into a
single :class:`GroupedEntry`. The :class:`Report` holds everything both
renderers need and is never mutated once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from figma_changelog.webhook.payload import Asset


@dataclass(frozen=True)
class StyleChange:
    """A published style with its node id, if one was resolved."""

    name: str
    key: str
    node_id: Optional[str] = None


@dataclass(frozen=True)
class ComponentChange:
    """A published component variant.

    Attributes
    ----------
    name : str
        Variant name as reported by the webhook.
    key : str
        Component key.
    node_id : Optional[str]
        Node id inside the library file.
    set_name : Optional[str]
        Name of the containing component set.
    """

    name: str
    key: str
    node_id: Optional[str] = None
    set_name: Optional[str] = None

    @property
    def grouping_key(self) -> str:
        return self.set_name or self.name

    @property
    def variant_count(self) -> int:
        return 1


@dataclass(frozen=True)
class GroupedEntry:
    """One or more component variants sharing a grouping key.

    Attributes
    ----------
    name : str
        The grouping key.
    node_id : Optional[str]
        Node id of the first variant encountered.
    variant_count : int
        Number of variants collapsed into this entry.
    """

    name: str
    node_id: Optional[str] = None
    variant_count: int = 1

    @property
    def grouping_key(self) -> str:
        return self.name


@dataclass(frozen=True)
class Report:
    """Classified and grouped changes of one library publish.

    ``version`` is ``None`` until the version resolver has run; use
    :func:`dataclasses.replace` to fill it in.
    """

    file_key: str
    timestamp: Optional[datetime] = None
    triggered_by: Optional[str] = None
    variables_added: Tuple[Asset, ...] = ()
    variables_deleted: Tuple[Asset, ...] = ()
    modified_variable_count: int = 0
    styles_added: Tuple[StyleChange, ...] = ()
    styles_modified: Tuple[StyleChange, ...] = ()
    styles_deleted: Tuple[StyleChange, ...] = ()
    components_added: Tuple[GroupedEntry, ...] = ()
    components_modified: Tuple[GroupedEntry, ...] = ()
    components_deleted: Tuple[GroupedEntry, ...] = ()
    has_added: bool = False
    has_deleted: bool = False
    previous_version: Optional[str] = None
    version: Optional[str] = None
