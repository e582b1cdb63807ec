from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel

from moments.domain.models import Event, Moment, MonthSection, YearSummary
from moments.schemas.event import EventResponse


class MomentResponse(BaseModel):
    id: str
    title: str
    date_label: str
    anchor_timestamp: Optional[datetime] = None
    total_in_window: int
    pending_count: int
    reviewed_percent: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    pending_events: List[EventResponse] = []

    @classmethod
    def from_domain(cls, moment: Moment) -> "MomentResponse":
        located = moment.representative_located_event
        return cls(
            id=moment.id,
            title=moment.title,
            date_label=moment.date_label,
            anchor_timestamp=moment.anchor_timestamp,
            total_in_window=moment.total_in_window,
            pending_count=moment.count,
            reviewed_percent=moment.reviewed_percent,
            lat=located.location.lat if located and located.location else None,
            lon=located.location.lon if located and located.location else None,
            pending_events=[EventResponse.from_domain(e) for e in moment.pending_events],
        )


class YearSummaryResponse(BaseModel):
    year: int
    moment_count: int
    to_review_count: int
    samples: List[EventResponse] = []

    @classmethod
    def from_domain(cls, summary: YearSummary, samples: Sequence[Event] = ()) -> "YearSummaryResponse":
        return cls(
            year=summary.year,
            moment_count=summary.moment_count,
            to_review_count=summary.to_review_count,
            samples=[EventResponse.from_domain(e) for e in samples],
        )


class MonthSectionResponse(BaseModel):
    key: str
    title: str
    moments: List[MomentResponse] = []

    @classmethod
    def from_domain(cls, section: MonthSection) -> "MonthSectionResponse":
        return cls(
            key=section.key,
            title=section.title,
            moments=[MomentResponse.from_domain(m) for m in section.moments],
        )


class ProgressResponse(BaseModel):
    total_events: int
    moment_count: int
    to_review_count: int
    reviewed_fraction: float


class RebuildResponse(BaseModel):
    total_events: int
    moment_count: int
    visible_count: int
