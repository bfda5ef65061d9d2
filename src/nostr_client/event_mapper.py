"""Pure functions mapping relay event dicts to RawEvent.

No I/O. Relays and client libraries disagree on where the author lives:
a top-level ``pubkey``, a plain ``author`` string, or an ``author`` object
carrying ``pubkey``/``hexpubkey``. All of them collapse to
``RawEvent.author`` here, so nothing downstream duck-types.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from challenge_engine.models.event import RawEvent

logger = logging.getLogger(__name__)


def map_raw_event(data: Any) -> Optional[RawEvent]:
    """Map one relay event to a RawEvent, or None if it lacks id, kind or author.

    Tags are kept verbatim (malformed entries included); a missing or
    non-list ``tags`` becomes an empty tuple.
    """
    if not isinstance(data, dict):
        return None

    event_id = data.get("id")
    author = extract_author(data)
    kind = _as_int(data.get("kind"))
    if not isinstance(event_id, str) or not event_id or author is None or kind is None:
        return None

    tags = data.get("tags")
    content = data.get("content")
    return RawEvent(
        id=event_id,
        kind=kind,
        content=content if isinstance(content, str) else "",
        tags=tuple(tags) if isinstance(tags, (list, tuple)) else (),
        created_at=_as_int(data.get("created_at")) or 0,
        author=author,
    )


def map_events(items: Iterable[Any]) -> list[RawEvent]:
    """Map many relay events, dropping the unmappable ones with a warning."""
    events: list[RawEvent] = []
    for item in items:
        event = map_raw_event(item)
        if event is None:
            logger.warning("Dropping unmappable relay event: %.80r", item)
            continue
        events.append(event)
    return events


def extract_author(data: dict[str, Any]) -> Optional[str]:
    """Resolve the author public key from any of the known shapes."""
    pubkey = data.get("pubkey")
    if isinstance(pubkey, str) and pubkey:
        return pubkey

    author = data.get("author")
    if isinstance(author, str) and author:
        return author
    if isinstance(author, dict):
        for key in ("pubkey", "hexpubkey"):
            value = author.get(key)
            if isinstance(value, str) and value:
                return value
    elif author is not None:
        for attr in ("pubkey", "hexpubkey"):
            value = getattr(author, attr, None)
            if isinstance(value, str) and value:
                return value
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None
