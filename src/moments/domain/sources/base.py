from abc import ABC, abstractmethod
from typing import Iterable, List

from moments.common.datetime_utils import ensure_aware
from moments.domain.models import Event


def sort_chronologically(events: Iterable[Event]) -> List[Event]:
    """Ascending by timestamp; events without one keep their relative order at the end."""
    return sorted(
        events,
        key=lambda e: (e.timestamp is None, ensure_aware(e.timestamp).timestamp() if e.timestamp is not None else 0.0),
    )


class EventSource(ABC):
    """Abstract base class for the external media library."""

    @abstractmethod
    async def fetch_all_events(self) -> List[Event]:
        """
        Read every event.

        Returns:
            Events sorted ascending by timestamp. Events with no timestamp are
            returned with `timestamp=None` rather than dropped.
        """
        pass

    @abstractmethod
    async def set_curated(self, event_id: str, value: bool) -> bool:
        """
        Set the curated (favorite) flag of an event.

        Args:
            event_id: The event to update.
            value: The new flag value.

        Returns:
            True if the event exists and was updated, False otherwise.
        """
        pass
