"""Nostr relay client — all network I/O for the challenge engine lives here."""

from nostr_client.cache import NullCache, TTLCache
from nostr_client.client import NostrClient
from nostr_client.event_mapper import map_events, map_raw_event
from nostr_client.exceptions import (
    NostrClientError,
    NostrFetchError,
    NostrPublishError,
    NostrRateLimitError,
)
from nostr_client.relay import JsonFileRelay

__all__ = [
    "JsonFileRelay",
    "NostrClient",
    "NostrClientError",
    "NostrFetchError",
    "NostrPublishError",
    "NostrRateLimitError",
    "NullCache",
    "TTLCache",
    "map_events",
    "map_raw_event",
]
