import logging
import uuid
from typing import AbstractSet, Callable, List, Optional, Sequence

from moments.domain.models import Event, Moment

logger = logging.getLogger(__name__)

SuppressionRule = Callable[[Sequence[Event]], bool]


def any_curated(segment: Sequence[Event]) -> bool:
    """A single curated event means the whole occasion has been handled."""
    return any(event.is_curated for event in segment)


class MomentBuilder:
    def __init__(self, suppress: SuppressionRule = any_curated):
        self.suppress = suppress

    def build(self, segments: List[List[Event]], reviewed_ids: AbstractSet[str]) -> List[Moment]:
        """Turns segments into moments, dropping curated and fully reviewed ones."""
        moments: List[Moment] = []
        suppressed = 0

        for segment in segments:
            if self.suppress(segment):
                suppressed += 1
                continue

            moment = self._build_one(segment, reviewed_ids)
            if moment is not None:
                moments.append(moment)

        logger.debug(
            f"Built {len(moments)} moments from {len(segments)} segments ({suppressed} suppressed as curated)."
        )
        return moments

    def _build_one(self, segment: Sequence[Event], reviewed_ids: AbstractSet[str]) -> Optional[Moment]:
        pending = tuple(event for event in segment if event.id not in reviewed_ids)
        if not pending:
            return None

        first = segment[0] if segment else None
        return Moment(
            id=first.id if first is not None else uuid.uuid4().hex,
            pending_events=pending,
            total_in_window=len(segment),
            anchor_timestamp=first.timestamp if first is not None else None,
            representative_located_event=next((e for e in segment if e.location is not None), None),
        )
