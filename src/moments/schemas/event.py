from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from moments.common.datetime_utils import parse_timestamp
from moments.domain.models import Event, Location


class EventRecord(BaseModel):
    """One stored capture record. Unreadable optional fields become None."""

    id: str
    timestamp: Optional[datetime] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    is_curated: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("timestamp", mode="before")
    @classmethod
    def lenient_timestamp(cls, value):
        return parse_timestamp(value)

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def lenient_coordinate(cls, value):
        if isinstance(value, bool):
            return None
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    @field_validator("is_curated", mode="before")
    @classmethod
    def lenient_flag(cls, value):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes")
        return bool(value) if value is not None else False

    def to_domain(self) -> Event:
        location = None
        if (
            self.lat is not None
            and self.lon is not None
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lon <= 180.0
        ):
            location = Location(lat=self.lat, lon=self.lon)
        return Event(id=self.id, timestamp=self.timestamp, location=location, is_curated=self.is_curated)


class EventResponse(BaseModel):
    id: str
    timestamp: Optional[datetime] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    is_curated: bool = False

    @classmethod
    def from_domain(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            timestamp=event.timestamp,
            lat=event.location.lat if event.location else None,
            lon=event.location.lon if event.location else None,
            is_curated=event.is_curated,
        )


class CuratedUpdateRequest(BaseModel):
    is_curated: bool
