"""Collaborator interfaces the room state machine depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod

from challenge_engine.models.event import EventDraft, EventFilter, PublishResult, RawEvent


class EventSource(ABC):
    """Query side of the event network."""

    @abstractmethod
    def fetch_events(self, event_filter: EventFilter, fresh: bool = False) -> list[RawEvent]:
        """Return matching events, already normalised, oldest first.

        ``fresh=True`` asks for a live answer: implementations that cache
        must not serve a stored result. Raises on transport failure; callers
        decide whether that is fatal.
        """
        ...


class EventPublisher(ABC):
    """Publish side of the event network."""

    @abstractmethod
    def publish(self, draft: EventDraft) -> PublishResult:
        ...
