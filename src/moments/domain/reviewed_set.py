import asyncio
import logging
from typing import FrozenSet, Iterable, Set

from moments.domain.storage.base import ReviewedStore

logger = logging.getLogger(__name__)


class ReviewedSet:
    """
    In-memory set of reviewed event ids backed by a ReviewedStore.

    Inserts are visible immediately; persistence happens in background
    flushes that always write the full current set. Flushes are serialized,
    and a failed flush leaves the set dirty so the next one retries.
    """

    def __init__(self, store: ReviewedStore, ids: Iterable[str] = ()):
        self._store = store
        self._ids: Set[str] = set(ids)
        self._dirty = False
        self._lock = asyncio.Lock()
        self._flush_tasks: Set[asyncio.Task] = set()

    @classmethod
    async def load(cls, store: ReviewedStore) -> "ReviewedSet":
        ids = await store.load()
        logger.info(f"Reviewed set loaded with {len(ids)} ids.")
        return cls(store, ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, event_id: str) -> bool:
        return self.contains(event_id)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def contains(self, event_id: str) -> bool:
        return event_id in self._ids

    def all(self) -> FrozenSet[str]:
        """Immutable snapshot for a clustering pass."""
        return frozenset(self._ids)

    def mark_reviewed(self, event_id: str) -> bool:
        """Adds an id and schedules a flush. Returns False if it was already present."""
        if event_id in self._ids:
            return False

        self._ids.add(event_id)
        self._dirty = True
        self._schedule_flush()
        return True

    def _schedule_flush(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Picked up by the next flush() or aclose()
            logger.debug("No running event loop, reviewed set flush deferred.")
            return

        task = loop.create_task(self.flush())
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)

    async def flush(self) -> bool:
        async with self._lock:
            if not self._dirty:
                return True

            self._dirty = False
            snapshot = frozenset(self._ids)
            try:
                await self._store.save(snapshot)
            except Exception as e:
                self._dirty = True
                logger.error(f"Failed to persist {len(snapshot)} reviewed ids: {e}", exc_info=True)
                return False

        logger.debug(f"Flushed {len(snapshot)} reviewed ids.")
        return True

    async def aclose(self) -> bool:
        """Waits for in-flight flushes and writes anything still pending."""
        if self._flush_tasks:
            await asyncio.gather(*list(self._flush_tasks))
        return await self.flush()
