from scheduler.store.events import EventStore

__all__ = ["EventStore"]
