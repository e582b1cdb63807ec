import logging
from typing import List, Optional

import numpy as np

from moments.domain.geo import distance_m
from moments.domain.models import Event
from moments.domain.presets import SmartSensitivity
from moments.domain.segmenters.base import Segmenter, gap_seconds
from moments.domain.segmenters.fixed_gap import FixedGapSegmenter

logger = logging.getLogger(__name__)

DAY_GAP_SEC = 24 * 3600.0
BURST_GAP_SEC = 60.0
DEFAULT_TIME_THRESHOLD_SEC = 18 * 3600.0
MIN_TIME_THRESHOLD_SEC = 30 * 60.0
MAX_TIME_THRESHOLD_SEC = 18 * 3600.0
THRESHOLD_PERCENTILE = 0.90
DEGENERATE_GAP_SEC = 3600.0


def compute_time_threshold(events: List[Event]) -> float:
    """
    Derives the within-day split threshold from the library's own pauses.

    Gaps shorter than a minute (burst shooting) are ignored. The threshold is
    the nearest-rank 90th percentile of the remaining gaps, clamped to
    [30 min, 18 h]. Anything of a day or more is split unconditionally, so
    the ceiling only needs to cover a single long day.
    """
    gaps = []
    for prev_event, current_event in zip(events, events[1:]):
        gap = gap_seconds(prev_event, current_event)
        if gap is not None and gap >= BURST_GAP_SEC:
            gaps.append(gap)

    if not gaps:
        logger.debug("No meaningful gaps found, using default time threshold.")
        return DEFAULT_TIME_THRESHOLD_SEC

    sorted_gaps = np.sort(np.asarray(gaps, dtype=float))
    index = int((len(sorted_gaps) - 1) * THRESHOLD_PERCENTILE)
    p90 = float(sorted_gaps[index])
    return float(np.clip(p90, MIN_TIME_THRESHOLD_SEC, MAX_TIME_THRESHOLD_SEC))


class SmartSegmenter(Segmenter):
    """
    Three-tier boundary detection, first matching tier wins:

    1. day gap: 24 h or more between events always splits.
    2. time gap: a pause at or above the adaptive threshold splits.
    3. location: after a short pause, moving further than the sensitivity's
       distance splits even if the pause alone would not. Events without a
       location only take part in tiers 1 and 2.
    """

    def __init__(
        self,
        sensitivity: SmartSensitivity = SmartSensitivity.BALANCED,
        location_threshold_m: Optional[float] = None,
        min_pause_sec: Optional[float] = None,
    ):
        self.sensitivity = sensitivity
        self.location_threshold_m = (
            location_threshold_m if location_threshold_m is not None else sensitivity.location_threshold_m
        )
        self.min_pause_sec = min_pause_sec if min_pause_sec is not None else sensitivity.min_pause_sec
        logger.debug(
            f"SmartSegmenter initialized with sensitivity: {sensitivity.value} "
            f"({self.location_threshold_m}m after {self.min_pause_sec}s)"
        )

    def segment(self, events: List[Event]) -> List[List[Event]]:
        if not events:
            return []
        if len(events) < 2:
            return FixedGapSegmenter(DEGENERATE_GAP_SEC).segment(events)

        time_threshold = compute_time_threshold(events)
        logger.info(f"Smart splitting {len(events)} events with time threshold {time_threshold:.0f}s.")

        segments: List[List[Event]] = []
        current_segment: List[Event] = [events[0]]

        for prev_event, current_event in zip(events, events[1:]):
            if self._is_boundary(prev_event, current_event, time_threshold):
                segments.append(current_segment)
                current_segment = [current_event]
            else:
                current_segment.append(current_event)

        segments.append(current_segment)

        logger.info(f"Smart splitting resulted in {len(segments)} segments.")
        return segments

    def _is_boundary(self, prev_event: Event, current_event: Event, time_threshold: float) -> bool:
        gap = gap_seconds(prev_event, current_event)
        if gap is None:
            return False

        if gap >= DAY_GAP_SEC:
            return True
        if gap >= time_threshold:
            return True
        if (
            gap >= self.min_pause_sec
            and prev_event.location is not None
            and current_event.location is not None
        ):
            moved = distance_m(prev_event.location, current_event.location)
            if moved > self.location_threshold_m:
                logger.debug(f"Moved {moved:.0f}m after {gap:.0f}s pause, splitting at {current_event.id}.")
                return True
        return False
