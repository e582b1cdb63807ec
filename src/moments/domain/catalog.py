import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable, Dict, List, Optional, Sequence

from moments.common.datetime_utils import ensure_aware, local_calendar, one_year_before, utcnow
from moments.domain.models import Event, Moment, MonthSection, YearSummary

logger = logging.getLogger(__name__)

LOCATION_MULTIPLIER = 1.3
ANNIVERSARY_MULTIPLIER = 2.0
NEAR_ANNIVERSARY_MULTIPLIER = 1.5
ANNIVERSARY_DAYS = 14
NEAR_ANNIVERSARY_DAYS = 30
DEFAULT_SUGGESTED_LIMIT = 5


class MomentCatalog:
    """
    Read-time view over the moments of one clustering pass.

    Nothing here mutates the moments. "now" is read from `clock` on every
    call, so the same catalog can be served for as long as it stays current.
    """

    def __init__(
        self,
        moments: Sequence[Moment],
        min_size: int = 1,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.moments = list(moments)
        self.min_size = min_size
        self.tz = tz
        self.clock = clock

    @property
    def filtered(self) -> List[Moment]:
        # Uses total_in_window so a mostly reviewed large outing still qualifies
        if self.min_size <= 1:
            return list(self.moments)
        return [m for m in self.moments if m.total_in_window >= self.min_size]

    @property
    def to_review_count(self) -> int:
        return sum(m.count for m in self.filtered)

    def reviewed_fraction(self, total_events: int) -> float:
        if total_events <= 0:
            return 0.0
        return (total_events - self.to_review_count) / total_events

    def get(self, moment_id: str) -> Optional[Moment]:
        return next((m for m in self.moments if m.id == moment_id), None)

    def _calendar(self, moment: Moment, now: datetime) -> datetime:
        return local_calendar(moment.anchor_timestamp, self.tz, now)

    def year_summaries(self) -> List[YearSummary]:
        """Groups the filtered moments by year, newest first."""
        now = self.clock()
        totals: Dict[int, List[int]] = {}
        for moment in self.filtered:
            year = self._calendar(moment, now).year
            entry = totals.setdefault(year, [0, 0])
            entry[0] += 1
            entry[1] += moment.count

        return [
            YearSummary(year=year, moment_count=counts[0], to_review_count=counts[1])
            for year, counts in sorted(totals.items(), reverse=True)
        ]

    def moments_for_year(self, year: int) -> List[Moment]:
        now = self.clock()
        return [m for m in self.filtered if self._calendar(m, now).year == year]

    def month_sections(self, year: int) -> List[MonthSection]:
        """Groups a year's moments by month, newest month first."""
        now = self.clock()
        sections: Dict[str, List[Moment]] = {}
        titles: Dict[str, str] = {}
        for moment in self.moments_for_year(year):
            local = self._calendar(moment, now)
            key = f"{local.year:04d}-{local.month:02d}"
            sections.setdefault(key, []).append(moment)
            titles.setdefault(key, local.strftime("%B %Y"))

        return [
            MonthSection(key=key, title=titles[key], moments=tuple(sections[key]))
            for key in sorted(sections, reverse=True)
        ]

    def sample_events(self, year: int, count: int = 3) -> List[Event]:
        """First pending event of each of the year's first `count` moments."""
        return [m.pending_events[0] for m in self.moments_for_year(year)[:count] if m.pending_events]

    def rank(self, moment: Moment, now: Optional[datetime] = None) -> float:
        """Engagement score: size, boosted for located and anniversary moments."""
        score = float(moment.total_in_window)
        if moment.has_location:
            score *= LOCATION_MULTIPLIER
        if moment.anchor_timestamp is not None:
            year_ago = one_year_before(ensure_aware(now or self.clock()))
            days = abs((ensure_aware(moment.anchor_timestamp) - year_ago).total_seconds()) / 86400
            if days < ANNIVERSARY_DAYS:
                score *= ANNIVERSARY_MULTIPLIER
            elif days < NEAR_ANNIVERSARY_DAYS:
                score *= NEAR_ANNIVERSARY_MULTIPLIER
        return score

    def suggested(self, limit: int = DEFAULT_SUGGESTED_LIMIT) -> List[Moment]:
        """Top moments by rank; ties keep chronological order."""
        now = self.clock()
        ranked = sorted(self.filtered, key=lambda m: self.rank(m, now), reverse=True)
        return ranked[:limit]
