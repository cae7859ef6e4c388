"""Dependency injection for FastAPI endpoints.

Controllers receive the process-owned ``EventStore`` through these
dependencies instead of reaching into ``scheduler.state`` directly.

Usage in controllers:
    from scheduler.dependencies import Store

    @router.get("/events")
    async def list_events(store: Store):
        return store.get_all()
"""

from typing import Annotated

from fastapi import Depends

from scheduler import state
from scheduler.errors import ServiceUnavailableError
from scheduler.store import EventStore


def get_store() -> EventStore:
    """Get the event store.

    Raises:
        ServiceUnavailableError: If the store has not been initialized.

    Returns:
        The EventStore instance.
    """
    if state.store is None:
        raise ServiceUnavailableError(detail="Event store not initialized")
    return state.store


def get_optional_store() -> EventStore | None:
    """Get the event store if available, or None."""
    return state.store


Store = Annotated[EventStore, Depends(get_store)]
OptionalStore = Annotated[EventStore | None, Depends(get_optional_store)]
