import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class Event:
    """A single capture record supplied by the event source."""

    id: str
    timestamp: Optional[datetime] = None
    location: Optional[Location] = None
    is_curated: bool = False


def _time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


@dataclass(frozen=True)
class Moment:
    """
    A review-worthy group of chronologically contiguous events.

    `pending_events` holds only the events that still need review, while
    `total_in_window` counts every event of the underlying segment.
    """

    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    pending_events: Tuple[Event, ...] = ()
    total_in_window: int = 0
    anchor_timestamp: Optional[datetime] = None
    representative_located_event: Optional[Event] = None

    @property
    def count(self) -> int:
        return len(self.pending_events)

    @property
    def has_location(self) -> bool:
        return (
            self.representative_located_event is not None
            and self.representative_located_event.location is not None
        )

    @property
    def reviewed_percent(self) -> int:
        if self.total_in_window <= 0:
            return 0
        done = self.total_in_window - self.count
        return int(done / self.total_in_window * 100)

    @property
    def title(self) -> str:
        """E.g. "Thursday afternoon"."""
        if self.anchor_timestamp is None:
            return "Unknown"
        dt = self.anchor_timestamp
        return f"{dt.strftime('%A')} {_time_of_day(dt.hour)}"

    @property
    def date_label(self) -> str:
        """E.g. "Jan 7, 2010"."""
        if self.anchor_timestamp is None:
            return ""
        dt = self.anchor_timestamp
        return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


@dataclass(frozen=True)
class YearSummary:
    year: int
    moment_count: int
    to_review_count: int


@dataclass(frozen=True)
class MonthSection:
    key: str  # "2010-01"
    title: str  # "January 2010"
    moments: Tuple[Moment, ...]
