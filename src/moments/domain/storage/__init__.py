from .base import ReviewedStore
from .factory import StorageFactory, get_event_source, get_reviewed_store

__all__ = ["ReviewedStore", "StorageFactory", "get_event_source", "get_reviewed_store"]
