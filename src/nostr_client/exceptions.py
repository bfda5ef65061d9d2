"""Custom exception hierarchy for the Nostr relay client."""

from __future__ import annotations


class NostrClientError(Exception):
    """Base exception for all nostr_client errors."""


class NostrFetchError(NostrClientError):
    """A relay query failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NostrRateLimitError(NostrFetchError):
    """HTTP 429 — the relay is throttling us."""

    def __init__(self, message: str = "Rate limited by relay") -> None:
        super().__init__(message, status_code=429)


class NostrPublishError(NostrClientError):
    """A signed event could not be published."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
