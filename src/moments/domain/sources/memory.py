import dataclasses
import logging
from typing import Dict, Iterable, List

from moments.domain.models import Event

from .base import EventSource, sort_chronologically

logger = logging.getLogger(__name__)


class InMemoryEventSource(EventSource):
    def __init__(self, events: Iterable[Event] = ()):
        self._events: Dict[str, Event] = {e.id: e for e in events}

    def add(self, event: Event) -> None:
        self._events[event.id] = event

    async def fetch_all_events(self) -> List[Event]:
        return sort_chronologically(self._events.values())

    async def set_curated(self, event_id: str, value: bool) -> bool:
        event = self._events.get(event_id)
        if event is None:
            logger.warning(f"Cannot set curated flag, event not found: {event_id}")
            return False
        self._events[event_id] = dataclasses.replace(event, is_curated=value)
        return True
