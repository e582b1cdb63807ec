import logging
from typing import AbstractSet, Set

from .base import ReviewedStore

logger = logging.getLogger(__name__)


class InMemoryReviewedStore(ReviewedStore):
    """Keeps reviewed ids for the lifetime of the process only."""

    def __init__(self, initial: AbstractSet[str] = frozenset()):
        self.ids: Set[str] = set(initial)
        self.save_count = 0

    async def load(self) -> Set[str]:
        return set(self.ids)

    async def save(self, ids: AbstractSet[str]) -> None:
        self.ids = set(ids)
        self.save_count += 1
        logger.debug(f"Stored {len(self.ids)} reviewed ids in memory.")
