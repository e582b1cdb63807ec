from abc import ABC, abstractmethod
from typing import List, Optional

from moments.common.datetime_utils import ensure_aware
from moments.domain.models import Event


def gap_seconds(prev: Event, curr: Event) -> Optional[float]:
    """Seconds between two events, or None when either timestamp is missing."""
    if prev.timestamp is None or curr.timestamp is None:
        return None
    return (ensure_aware(curr.timestamp) - ensure_aware(prev.timestamp)).total_seconds()


class Segmenter(ABC):
    """Abstract base class for a boundary detection strategy."""

    @abstractmethod
    def segment(self, events: List[Event]) -> List[List[Event]]:
        """
        Cuts a chronologically ordered list of events into segments.

        Args:
            events: Events sorted ascending by timestamp.

        Returns:
            Disjoint, ordered sublists whose concatenation is `events`.
        """
        pass
