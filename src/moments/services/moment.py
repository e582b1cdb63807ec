import asyncio
import logging
from concurrent.futures import Executor
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional

from moments.common.datetime_utils import utcnow
from moments.domain.catalog import MomentCatalog
from moments.domain.pipeline import MomentPipeline
from moments.domain.presets import ClusteringSettings
from moments.domain.reviewed_set import ReviewedSet
from moments.domain.sources import EventSource

logger = logging.getLogger(__name__)


class MomentService:
    """
    Owns the current catalog and the rebuild lifecycle.

    A rebuild snapshots settings and reviewed ids, runs the clustering pass in
    an executor and publishes the result only if no newer rebuild started in
    the meantime.
    """

    def __init__(
        self,
        event_source: EventSource,
        reviewed_set: ReviewedSet,
        settings: ClusteringSettings = ClusteringSettings(),
        tz: tzinfo = timezone.utc,
        executor: Optional[Executor] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.event_source = event_source
        self.reviewed_set = reviewed_set
        self.tz = tz
        self.executor = executor
        self.clock = clock
        self._settings = settings
        self._catalog = self._make_catalog([], settings)
        self._total_events = 0
        self._generation = 0

    def _make_catalog(self, moments, settings: ClusteringSettings) -> MomentCatalog:
        return MomentCatalog(moments, min_size=settings.min_set_size, tz=self.tz, clock=self.clock)

    @property
    def settings(self) -> ClusteringSettings:
        return self._settings

    @property
    def catalog(self) -> MomentCatalog:
        return self._catalog

    @property
    def total_events(self) -> int:
        return self._total_events

    async def rebuild(self) -> MomentCatalog:
        self._generation += 1
        generation = self._generation
        settings = self._settings
        logger.info(
            f"Rebuild #{generation} started (mode: {settings.mode.value}).",
            extra={"generation": generation},
        )

        try:
            events = await self.event_source.fetch_all_events()
        except Exception as e:
            logger.error(f"Failed to fetch events, treating as empty: {e}", exc_info=True)
            events = []

        reviewed_ids = self.reviewed_set.all()
        pipeline = MomentPipeline(settings)
        loop = asyncio.get_running_loop()
        moments = await loop.run_in_executor(self.executor, pipeline.run, events, reviewed_ids)

        if generation != self._generation:
            logger.info(
                f"Rebuild #{generation} superseded by #{self._generation}, discarding result.",
                extra={"generation": generation},
            )
            return self._make_catalog(moments, settings)

        # Clustering used the snapshot; the size filter follows whatever is current now
        catalog = self._make_catalog(moments, self._settings)
        self._catalog = catalog
        self._total_events = len(events)
        logger.info(
            f"Rebuild #{generation} published {len(moments)} moments from {len(events)} events.",
            extra={"generation": generation},
        )
        return catalog

    async def update_settings(self, settings: ClusteringSettings) -> MomentCatalog:
        """Applies new settings; only clustering parameters require a rebuild."""
        previous = self._settings
        self._settings = settings

        if previous.same_clustering(settings):
            logger.info(f"Minimum set size changed to {settings.min_set_size}, refiltering.")
            self._catalog = self._make_catalog(self._catalog.moments, settings)
            return self._catalog

        logger.info("Clustering settings changed, rebuilding.")
        return await self.rebuild()

    def mark_reviewed(self, event_id: str) -> bool:
        added = self.reviewed_set.mark_reviewed(event_id)
        if added:
            logger.debug(f"Event {event_id} marked reviewed.", extra={"event_id": event_id})
        return added

    async def set_curated(self, event_id: str, value: bool) -> bool:
        """Forwards to the event source; the next rebuild observes the change."""
        return await self.event_source.set_curated(event_id, value)
