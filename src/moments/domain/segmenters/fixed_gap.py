import logging
from typing import List

from moments.domain.models import Event
from moments.domain.segmenters.base import Segmenter, gap_seconds

logger = logging.getLogger(__name__)


class FixedGapSegmenter(Segmenter):
    def __init__(self, gap_threshold_sec: float):
        self.gap_threshold_sec = gap_threshold_sec
        logger.debug(f"FixedGapSegmenter initialized with gap threshold: {gap_threshold_sec}s")

    def segment(self, events: List[Event]) -> List[List[Event]]:
        """Splits events wherever the time gap exceeds the threshold."""
        if not events:
            return []

        segments: List[List[Event]] = []
        current_segment: List[Event] = [events[0]]

        for prev_event, current_event in zip(events, events[1:]):
            gap = gap_seconds(prev_event, current_event)
            # Events without a timestamp stay with their predecessor
            if gap is not None and gap > self.gap_threshold_sec:
                segments.append(current_segment)
                current_segment = [current_event]
            else:
                current_segment.append(current_event)

        segments.append(current_segment)

        logger.debug(f"Fixed-gap splitting of {len(events)} events resulted in {len(segments)} segments.")
        return segments
