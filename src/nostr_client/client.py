"""High-level Nostr relay client facade.

The transport is injected as two plain callables so the same facade works
over a websocket pool, an HTTP gateway or the offline JSON relay:

    fetch_fn(filter_dict) -> list[dict]
    publish_fn(event_dict) -> str | dict   # event id, or {"id": ...}

All calls go through ``_safe_call`` for retry on 429.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from challenge_engine.models.event import EventDraft, EventFilter, PublishResult, RawEvent
from challenge_engine.room.ports import EventPublisher, EventSource

from nostr_client.cache import FEED_TTL_S, NullCache, TTLCache
from nostr_client.event_mapper import map_events
from nostr_client.exceptions import (
    NostrFetchError,
    NostrPublishError,
    NostrRateLimitError,
)

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2

FetchFn = Callable[[dict[str, Any]], list[dict[str, Any]]]
PublishFn = Callable[[dict[str, Any]], Any]


class NostrClient(EventSource, EventPublisher):
    """Facade for workout queries and note publishing."""

    def __init__(
        self,
        fetch_fn: FetchFn,
        publish_fn: Optional[PublishFn] = None,
        cache: TTLCache | None = None,
        cache_ttl_s: float = FEED_TTL_S,
    ) -> None:
        self._fetch_fn = fetch_fn
        self._publish_fn = publish_fn
        self._cache = cache if cache is not None else NullCache()
        self._cache_ttl_s = cache_ttl_s

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def fetch_events(self, event_filter: EventFilter, fresh: bool = False) -> list[RawEvent]:
        """Run a relay query and return normalised events, oldest first.

        With ``fresh=True`` the cached answer is skipped and the relay is
        always queried; the new result still refreshes the cache.

        Raises:
            NostrFetchError: on a non-retryable transport failure.
            NostrRateLimitError: if still throttled after all retries.
        """
        key = event_filter.cache_key()
        if not fresh:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return list(cached)

        raw = self._safe_call(self._fetch_fn, to_filter_dict(event_filter)) or []
        events = sorted(map_events(raw), key=lambda e: e.created_at)
        logger.info("Fetched %d events for kinds=%s", len(events), sorted(event_filter.kinds))
        self._cache.set(key, tuple(events), self._cache_ttl_s)
        return events

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def publish(self, draft: EventDraft) -> PublishResult:
        """Publish *draft*. Any failure is reported in the result, never raised."""
        if self._publish_fn is None:
            return PublishResult(success=False, error="No publisher configured")
        try:
            resp = self._safe_call(
                self._publish_fn, to_event_dict(draft), error_cls=NostrPublishError
            )
            event_id = _extract_event_id(resp)
        except Exception as exc:
            logger.warning("Failed to publish kind %d note: %s", draft.kind, exc)
            return PublishResult(success=False, error=str(exc))

        logger.info("Published kind %d note id=%s", draft.kind, event_id)
        return PublishResult(success=True, event_id=event_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _safe_call(
        self,
        fn: Callable,
        payload: dict[str, Any],
        error_cls: type[NostrFetchError] | type[NostrPublishError] = NostrFetchError,
    ) -> Any:
        """Send *payload* through a transport callable, backing off while throttled.

        A throttled relay is retried up to ``_MAX_RETRIES`` times; any other
        transport failure is wrapped in *error_cls* with the status it carried.
        """
        throttled_by: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(payload)
            except Exception as exc:
                status = _status_of(exc)
                if status != 429:
                    raise error_cls(str(exc), status_code=status) from exc
                throttled_by = exc
                if attempt + 1 < _MAX_RETRIES:
                    wait = _BASE_BACKOFF_S * (2 ** attempt)
                    logger.warning(
                        "Relay throttled (%d/%d), backing off %ds",
                        attempt + 1,
                        _MAX_RETRIES,
                        wait,
                    )
                    time.sleep(wait)

        raise NostrRateLimitError(
            f"Still throttled after {_MAX_RETRIES} attempts: {throttled_by}"
        )


def to_filter_dict(event_filter: EventFilter) -> dict[str, Any]:
    """Relay wire shape of an EventFilter (unset fields omitted)."""
    result: dict[str, Any] = {"kinds": sorted(event_filter.kinds)}
    if event_filter.authors:
        result["authors"] = sorted(event_filter.authors)
    if event_filter.since is not None:
        result["since"] = event_filter.since
    if event_filter.limit is not None:
        result["limit"] = event_filter.limit
    return result


def to_event_dict(draft: EventDraft) -> dict[str, Any]:
    """Unsigned event dict for the publish transport."""
    return {
        "kind": draft.kind,
        "content": draft.content,
        "tags": [list(t) for t in draft.tags],
        "created_at": draft.created_at if draft.created_at is not None else int(time.time()),
    }


def _status_of(exc: Exception) -> int | None:
    """HTTP-ish status carried by a transport exception, if any."""
    for attr in ("status", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def _extract_event_id(resp: Any) -> str:
    if isinstance(resp, str) and resp:
        return resp
    if isinstance(resp, dict) and isinstance(resp.get("id"), str):
        return resp["id"]
    raise NostrPublishError(f"Unexpected publish response: {resp!r}")
