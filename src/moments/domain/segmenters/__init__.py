from .base import Segmenter
from .fixed_gap import FixedGapSegmenter
from .smart import SmartSegmenter, compute_time_threshold

__all__ = ["Segmenter", "FixedGapSegmenter", "SmartSegmenter", "compute_time_threshold"]
