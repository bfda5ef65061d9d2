"""In-process TTL cache for relay responses.

Keys are namespaced with a prefix; entries expire individually. Expired
entries are dropped lazily on read.
"""

from __future__ import annotations

import time
from typing import Any, Callable

DEFAULT_PREFIX = "gantz_"
DEFAULT_TTL_S = 5 * 60
PROFILE_TTL_S = 30 * 60
FEED_TTL_S = 2 * 60
USER_WORKOUTS_TTL_S = 5 * 60


class TTLCache:
    """Key/value store where each entry carries its own expiry."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        default_ttl_s: float = DEFAULT_TTL_S,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._prefix = prefix
        self._default_ttl_s = default_ttl_s
        self._clock = clock
        self._items: dict[str, tuple[float, Any]] = {}

    def set(self, key: str, data: Any, ttl_s: float | None = None) -> None:
        ttl = self._default_ttl_s if ttl_s is None else ttl_s
        self._items[self._prefix + key] = (self._clock() + ttl, data)

    def get(self, key: str) -> Any:
        """Return the cached value, or None if missing or expired."""
        full_key = self._prefix + key
        item = self._items.get(full_key)
        if item is None:
            return None
        expiry, data = item
        if self._clock() > expiry:
            del self._items[full_key]
            return None
        return data

    def remove(self, key: str) -> None:
        self._items.pop(self._prefix + key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    # Convenience wrappers with per-kind lifetimes

    def cache_profile(self, pubkey: str, profile: Any) -> None:
        self.set(f"profile_{pubkey}", profile, PROFILE_TTL_S)

    def get_profile(self, pubkey: str) -> Any:
        return self.get(f"profile_{pubkey}")

    def cache_feed(self, workouts: Any) -> None:
        self.set("workout_feed", workouts, FEED_TTL_S)

    def get_feed(self) -> Any:
        return self.get("workout_feed")

    def cache_user_workouts(self, pubkey: str, workouts: Any) -> None:
        self.set(f"user_workouts_{pubkey}", workouts, USER_WORKOUTS_TTL_S)

    def get_user_workouts(self, pubkey: str) -> Any:
        return self.get(f"user_workouts_{pubkey}")


class NullCache(TTLCache):
    """Cache that never stores anything."""

    def set(self, key: str, data: Any, ttl_s: float | None = None) -> None:
        return None

    def get(self, key: str) -> Any:
        return None
