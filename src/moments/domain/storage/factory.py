import logging
from functools import lru_cache

from moments.core.config import configs
from moments.domain.sources import EventSource, InMemoryEventSource, LocalEventSource

from .base import ReviewedStore
from .local import LocalReviewedStore
from .memory import InMemoryReviewedStore

logger = logging.getLogger(__name__)


class StorageFactory:
    @staticmethod
    def get_reviewed_store(service_type: str = "local") -> ReviewedStore:
        logger.info(f"Creating reviewed store of type: {service_type}")
        if service_type == "local":
            return LocalReviewedStore(configs.reviewed_path)
        elif service_type == "memory":
            return InMemoryReviewedStore()
        else:
            logger.error(f"Unknown storage type requested: {service_type}")
            raise ValueError(f"Unknown storage type: {service_type}")

    @staticmethod
    def get_event_source(service_type: str = "local") -> EventSource:
        logger.info(f"Creating event source of type: {service_type}")
        if service_type == "local":
            return LocalEventSource(configs.events_path)
        elif service_type == "memory":
            return InMemoryEventSource()
        else:
            logger.error(f"Unknown storage type requested: {service_type}")
            raise ValueError(f"Unknown storage type: {service_type}")


@lru_cache()
def get_reviewed_store() -> ReviewedStore:
    storage_type = getattr(configs, "STORAGE_TYPE", "local")
    logger.debug(f"Getting reviewed store (cached). Type: {storage_type}")
    return StorageFactory.get_reviewed_store(storage_type)


@lru_cache()
def get_event_source() -> EventSource:
    storage_type = getattr(configs, "STORAGE_TYPE", "local")
    logger.debug(f"Getting event source (cached). Type: {storage_type}")
    return StorageFactory.get_event_source(storage_type)
