import logging
import time
from typing import AbstractSet, List, Optional

from moments.domain.models import Event, Moment
from moments.domain.moment_builder import MomentBuilder
from moments.domain.presets import ClusteringSettings, ClusterMode
from moments.domain.segmenters import FixedGapSegmenter, Segmenter, SmartSegmenter

logger = logging.getLogger(__name__)


class MomentPipeline:
    """
    Pure clustering pass: segment the events, then build moments.

    Inputs are treated as an immutable snapshot; the pass does no I/O and is
    safe to run in a worker thread.
    """

    def __init__(self, settings: ClusteringSettings, builder: Optional[MomentBuilder] = None):
        self.settings = settings
        self.segmenter = self._create_segmenter(settings)
        self.builder = builder or MomentBuilder()
        logger.debug(f"Pipeline initialized with {self.segmenter.__class__.__name__}.")

    def _create_segmenter(self, settings: ClusteringSettings) -> Segmenter:
        """Factory method to create the segmenter for the configured mode."""
        if settings.mode == ClusterMode.FIXED:
            return FixedGapSegmenter(settings.gap.threshold_sec)
        return SmartSegmenter(settings.sensitivity)

    def run(self, events: List[Event], reviewed_ids: AbstractSet[str]) -> List[Moment]:
        start_time = time.time()
        logger.info(f"Clustering {len(events)} events ({len(reviewed_ids)} already reviewed).")

        segments = self.segmenter.segment(events)
        moments = self.builder.build(segments, reviewed_ids)
        elapsed = time.time() - start_time

        logger.info(
            f"Clustering finished. {len(segments)} segments, {len(moments)} moments in {elapsed:.2f} seconds.",
            extra={"duration_ms": round(elapsed * 1000)},
        )
        return moments
