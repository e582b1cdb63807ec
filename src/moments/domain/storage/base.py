from abc import ABC, abstractmethod
from typing import AbstractSet, Set


class ReviewedStore(ABC):
    """Abstract base class for durable storage of reviewed event ids."""

    @abstractmethod
    async def load(self) -> Set[str]:
        """
        Load every persisted id.

        Returns:
            The stored ids, or an empty set when nothing has been saved yet.
        """
        pass

    @abstractmethod
    async def save(self, ids: AbstractSet[str]) -> None:
        """
        Replace the stored ids with a full snapshot.

        Args:
            ids: The complete set of reviewed ids.
        """
        pass
