from typing import Optional

from scheduler.store import EventStore

# Global runtime state initialized in lifespan.setup_resources
store: Optional[EventStore] = None
