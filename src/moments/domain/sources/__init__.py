from .base import EventSource, sort_chronologically
from .local import LocalEventSource
from .memory import InMemoryEventSource

__all__ = ["EventSource", "LocalEventSource", "InMemoryEventSource", "sort_chronologically"]
