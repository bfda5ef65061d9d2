"""Environment-variable-based configuration for the room runner."""

from __future__ import annotations

import os
from pathlib import Path

from challenge_engine.models.enums import (
    CHALLENGE_WINDOW_HOURS,
    FEED_POLL_INTERVAL_S,
    PREP_COUNTDOWN_S,
    ROOM_SIZE,
)

EVENTS_PATH: Path = Path(os.environ.get("GANTZ_EVENTS_PATH", "events.json")).expanduser()
ROOM_SIZE_TARGET: int = int(os.environ.get("GANTZ_ROOM_SIZE", str(ROOM_SIZE)))
COUNTDOWN_S: float = float(os.environ.get("GANTZ_COUNTDOWN_S", str(PREP_COUNTDOWN_S)))
CHALLENGE_HOURS: float = float(os.environ.get("GANTZ_CHALLENGE_HOURS", str(CHALLENGE_WINDOW_HOURS)))
POLL_INTERVAL_S: float = float(os.environ.get("GANTZ_POLL_INTERVAL_S", str(FEED_POLL_INTERVAL_S)))
REFORM_DELAY_S: float = float(os.environ.get("GANTZ_REFORM_DELAY_S", "300"))
RANDOM_SEED: int | None = (
    int(os.environ["GANTZ_RANDOM_SEED"]) if os.environ.get("GANTZ_RANDOM_SEED") else None
)
