from typing import Any, Dict

from fastapi import APIRouter

from scheduler.dependencies import OptionalStore

router = APIRouter()


@router.get("/health")
def health(store: OptionalStore) -> Dict[str, Any]:
    if store is None:
        return {"status": "ok", "store": "uninitialized", "events": 0}
    return {"status": "ok", "store": "ready", "events": len(store)}
