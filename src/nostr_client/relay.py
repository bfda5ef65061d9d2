"""Offline relay backed by a JSON file of events.

Serves the same filter semantics a relay does (kinds, authors, since,
newest first, limit) so the room loop can run without a network.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from nostr_client.event_mapper import extract_author

logger = logging.getLogger(__name__)


class JsonFileRelay:
    """Reads a JSON array of relay events and answers filter queries.

    The file is re-read on every query so appended events show up on the
    next poll. Published notes are kept in memory only.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self.published: list[dict[str, Any]] = []

    def load(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            logger.warning("Events file %s not found; serving nothing", self._path)
            return []
        with open(self._path) as f:
            data = json.load(f)
        if not isinstance(data, list):
            logger.warning("Events file %s is not a JSON array", self._path)
            return []
        return data

    def fetch(self, filter_dict: dict[str, Any]) -> list[dict[str, Any]]:
        kinds = set(filter_dict.get("kinds") or ())
        authors = set(filter_dict.get("authors") or ())
        since = filter_dict.get("since")
        limit = filter_dict.get("limit")

        matched = []
        for item in self.load():
            if not isinstance(item, dict):
                continue
            if kinds and item.get("kind") not in kinds:
                continue
            if authors and extract_author(item) not in authors:
                continue
            created_at = item.get("created_at")
            if since is not None and (not isinstance(created_at, (int, float)) or created_at < since):
                continue
            matched.append(item)

        matched.sort(key=lambda e: e.get("created_at") or 0, reverse=True)
        return matched[:limit] if limit is not None else matched

    def publish(self, event_dict: dict[str, Any]) -> str:
        event_id = f"local-{len(self.published) + 1}"
        self.published.append({**event_dict, "id": event_id})
        return event_id
