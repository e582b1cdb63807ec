from dataclasses import dataclass
from enum import Enum


class ClusterMode(str, Enum):
    SMART = "smart"
    FIXED = "fixed"


class ClusterGap(str, Enum):
    """Static gap presets used by fixed-gap clustering."""

    NARROW = "narrow"
    MEDIUM = "medium"
    BROAD = "broad"

    @property
    def threshold_sec(self) -> float:
        return {
            ClusterGap.NARROW: 3600.0,
            ClusterGap.MEDIUM: 3 * 3600.0,
            ClusterGap.BROAD: 8 * 3600.0,
        }[self]


class SmartSensitivity(str, Enum):
    """How aggressively smart clustering splits on a change of place."""

    TIGHT = "tight"
    BALANCED = "balanced"
    LOOSE = "loose"

    @property
    def location_threshold_m(self) -> float:
        """Distance from the previous event before it counts as a new place."""
        return {
            SmartSensitivity.TIGHT: 1500.0,
            SmartSensitivity.BALANCED: 3000.0,
            SmartSensitivity.LOOSE: 5000.0,
        }[self]

    @property
    def min_pause_sec(self) -> float:
        """Pause required before a change of place may split."""
        return {
            SmartSensitivity.TIGHT: 120.0,
            SmartSensitivity.BALANCED: 180.0,
            SmartSensitivity.LOOSE: 480.0,
        }[self]


class MinSetSize(int, Enum):
    ALL = 1
    MOMENTS = 5
    EVENTS = 20
    ADVENTURES = 50


@dataclass(frozen=True)
class ClusteringSettings:
    mode: ClusterMode = ClusterMode.SMART
    gap: ClusterGap = ClusterGap.MEDIUM
    sensitivity: SmartSensitivity = SmartSensitivity.BALANCED
    min_set_size: int = MinSetSize.ALL.value

    def same_clustering(self, other: "ClusteringSettings") -> bool:
        """True when only read-time options differ."""
        return (
            self.mode == other.mode
            and self.gap == other.gap
            and self.sensitivity == other.sensitivity
        )
