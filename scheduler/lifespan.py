"""Application startup and shutdown.

The event store lives exactly as long as the process: it is created when the
app starts and dropped when it stops. Nothing is persisted.
"""

import logging
from dataclasses import dataclass

from scheduler import state
from scheduler.config import get_settings
from scheduler.store import EventStore

logger = logging.getLogger(__name__)


@dataclass
class LifespanResources:
    """Container for resources initialized during lifespan."""

    store: EventStore | None = None


def init_store() -> EventStore:
    """Create an empty event store from settings."""
    settings = get_settings()
    return EventStore(name_max_length=settings.store.name_max_length)


def setup_resources() -> LifespanResources:
    """Set up all shared resources and publish them in ``state``."""
    resources = LifespanResources()
    resources.store = init_store()
    state.store = resources.store
    logger.info("Event store initialized")
    return resources


def cleanup_resources(resources: LifespanResources) -> None:
    """Release resources on shutdown."""
    if resources.store is not None:
        logger.info("Discarding event store with %d events", len(resources.store))
    resources.store = None
    state.store = None
