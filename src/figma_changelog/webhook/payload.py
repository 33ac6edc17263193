"""
Normalization of Figma library publish webhooks.

Figma delivers a ``LIBRARY_PUBLISH`` event whose asset lists live in a
nested ``changes`` object. :func:`normalize_payload` authenticates the
event, flattens it and returns an immutable :class:`ChangeSet`. Liveness
checks (``PING``) and events carrying the wrong passcode yield ``None``:
they are skipped, not failed. Anything that cannot be read as a webhook
raises :class:`PayloadError`.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple, Union


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PING_EVENT = "PING"

ASSET_FIELDS = (
    "created_variables",
    "deleted_variables",
    "modified_variables",
    "created_styles",
    "deleted_styles",
    "modified_styles",
    "created_components",
    "deleted_components",
    "modified_components",
)
KNOWN_FIELDS = set(ASSET_FIELDS) | {"file_key", "timestamp", "triggered_by"}

# Fractional seconds and UTC offset, which fromisoformat() only accepts
# as 3 or 6 digits and "+HH:MM" before Python 3.11.
_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]|$)")
_OFFSET_RE = re.compile(r"([+-]\d{2})(\d{2})$")


class PayloadError(Exception):
    """Raised when the webhook payload cannot be interpreted."""

    pass


@dataclass(frozen=True)
class Asset:
    """A published variable, style or component as reported by the webhook."""

    name: str
    key: str


@dataclass(frozen=True)
class ChangeSet:
    """Flattened, authenticated webhook content.

    Attributes
    ----------
    created_variables, deleted_variables, modified_variables : Tuple[Asset, ...]
    created_styles, deleted_styles, modified_styles : Tuple[Asset, ...]
    created_components, deleted_components, modified_components : Tuple[Asset, ...]
        Asset lists in delivery order.
    file_key : str
        Key of the Figma library file that was published.
    timestamp : Optional[datetime]
        Timezone-aware publish time, ``None`` when the event carries none.
    triggered_by : Optional[str]
        Handle of the user who published the library.
    extras : Dict[str, Any]
        Remaining top-level fields, kept as delivered.
    """

    file_key: str
    timestamp: Optional[datetime] = None
    triggered_by: Optional[str] = None
    created_variables: Tuple[Asset, ...] = ()
    deleted_variables: Tuple[Asset, ...] = ()
    modified_variables: Tuple[Asset, ...] = ()
    created_styles: Tuple[Asset, ...] = ()
    deleted_styles: Tuple[Asset, ...] = ()
    modified_styles: Tuple[Asset, ...] = ()
    created_components: Tuple[Asset, ...] = ()
    deleted_components: Tuple[Asset, ...] = ()
    modified_components: Tuple[Asset, ...] = ()
    extras: Dict[str, Any] = field(default_factory=dict, compare=False)


def parse_payload(raw: Union[str, bytes]) -> Dict[str, Any]:
    """Decode the raw webhook body into a JSON object."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.error("Webhook payload is not valid JSON: %s", exc)
        raise PayloadError(f"Webhook payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError("Webhook payload must be a JSON object")
    return data


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a webhook timestamp.

    ISO-8601 strings and epoch milliseconds are accepted. Naive values
    are taken to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise PayloadError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise PayloadError(f"Invalid timestamp: {value!r}") from exc
    if not isinstance(value, str):
        raise PayloadError(f"Invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _OFFSET_RE.sub(r"\1:\2", text)
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise PayloadError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_assets(field_name: str, value: Any) -> Tuple[Asset, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise PayloadError(f"'{field_name}' must be a list")
    assets = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise PayloadError(f"'{field_name}[{index}]' must be an object")
        key = entry.get("key")
        name = entry.get("name")
        if not isinstance(key, str) or not key:
            raise PayloadError(f"'{field_name}[{index}]' has no asset key")
        if not isinstance(name, str):
            raise PayloadError(f"'{field_name}[{index}]' has no name")
        assets.append(Asset(name=name, key=key))
    return tuple(assets)


def _triggered_by_handle(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        handle = value.get("handle")
        if isinstance(handle, str) and handle:
            return handle
    return None


def normalize_payload(
    raw: Union[str, bytes, Mapping[str, Any]], passcode: str
) -> Optional[ChangeSet]:
    """Authenticate and flatten a webhook event.

    Args:
        raw: The webhook body, either undecoded or already parsed.
        passcode: Shared secret the event must carry.

    Returns:
        The :class:`ChangeSet`, or ``None`` if the event should be skipped.

    Raises:
        PayloadError: If the payload is malformed.
    """
    event = dict(raw) if isinstance(raw, Mapping) else parse_payload(raw)

    if event.get("event_type") == PING_EVENT:
        logger.info("PING received, skipping")
        return None
    if event.get("passcode") != passcode:
        logger.info("Invalid passcode, skipping")
        return None

    changes = event.pop("changes", None)
    if changes is None:
        changes = {}
    if not isinstance(changes, dict):
        raise PayloadError("'changes' must be an object")
    merged = {**event, **changes}

    file_key = merged.get("file_key")
    if not isinstance(file_key, str) or not file_key:
        raise PayloadError("Webhook payload has no 'file_key'")

    assets = {name: _parse_assets(name, merged.get(name)) for name in ASSET_FIELDS}
    extras = {key: value for key, value in merged.items() if key not in KNOWN_FIELDS}

    change_set = ChangeSet(
        file_key=file_key,
        timestamp=parse_timestamp(merged.get("timestamp")),
        triggered_by=_triggered_by_handle(merged.get("triggered_by")),
        extras=extras,
        **assets,
    )
    logger.debug(
        "Normalized webhook for file %s: %s",
        file_key,
        {name: len(items) for name, items in assets.items()},
    )
    return change_set
