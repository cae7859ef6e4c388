import hmac
import logging

from fastapi import APIRouter, Header, Response

from scheduler.config import get_settings
from scheduler.dependencies import Store
from scheduler.errors import NotFoundError
from scheduler.models.events import (
    CreateEventRequest,
    Event,
    UpdateEventRequest,
    UpdateVoteRequest,
    Vote,
    VoteCreatedResponse,
    VoteRequest,
    VoteUpdatedResponse,
)

logger = logging.getLogger("scheduler.events")
router = APIRouter(prefix="/events", tags=["events"])


def _is_admin(x_admin_secret: str | None) -> bool:
    settings = get_settings()
    if not settings.admin.enabled or not x_admin_secret:
        return False
    return hmac.compare_digest(x_admin_secret.encode(), settings.admin.secret.encode())


def _event_not_found(event_id: str) -> NotFoundError:
    logger.warning("Event not found: %s", event_id)
    return NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)


@router.post("", status_code=201, response_model=Event)
def create_event(req: CreateEventRequest, store: Store) -> Event:
    logger.info("POST /events creator=%s dates=%d", req.creator, len(req.dates))
    event = store.create_event(
        name=req.name,
        creator=req.creator,
        info=req.info,
        dates=[d.model_dump() for d in req.dates],
    )
    return Event.model_validate(event)


@router.get("", response_model=list[Event])
def list_events(store: Store) -> list[Event]:
    return [Event.model_validate(e) for e in store.get_all()]


@router.get("/{event_id}", response_model=Event)
def get_event(event_id: str, store: Store) -> Event:
    event = store.get_by_id(event_id)
    if event is None:
        raise _event_not_found(event_id)
    return Event.model_validate(event)


@router.patch("/{event_id}", response_model=Event)
def update_event(event_id: str, req: UpdateEventRequest, store: Store) -> Event:
    logger.info("PATCH /events/%s fields=%s", event_id, sorted(req.model_dump(exclude_none=True)))
    event = store.update_event(
        event_id,
        name=req.name,
        info=req.info,
        dates=[d.model_dump() for d in req.dates] if req.dates is not None else None,
    )
    if event is None:
        raise _event_not_found(event_id)
    return Event.model_validate(event)


@router.delete("/{event_id}", status_code=204)
def delete_event(event_id: str, store: Store) -> Response:
    if not store.delete_event(event_id):
        raise _event_not_found(event_id)
    return Response(status_code=204)


@router.post("/{event_id}/votes", status_code=201, response_model=VoteCreatedResponse)
def add_vote(event_id: str, req: VoteRequest, store: Store) -> VoteCreatedResponse:
    logger.info("POST /events/%s/votes dates=%d", event_id, len(req.availability))
    created = store.add_vote(event_id, req.name, req.availability)
    return VoteCreatedResponse(vote=Vote.model_validate(created["vote"]), token=created["token"])


@router.get("/{event_id}/votes/{vote_id}", response_model=Vote)
def get_vote(event_id: str, vote_id: str, store: Store) -> Vote:
    return Vote.model_validate(store.get_vote(event_id, vote_id))


@router.put("/{event_id}/votes/{vote_id}", response_model=VoteUpdatedResponse)
def update_vote(
    event_id: str,
    vote_id: str,
    req: UpdateVoteRequest,
    store: Store,
    x_vote_token: str | None = Header(None, alias="X-Vote-Token"),
) -> VoteUpdatedResponse:
    logger.info("PUT /events/%s/votes/%s", event_id, vote_id)
    success = store.update_vote(event_id, vote_id, x_vote_token, req.availability)
    return VoteUpdatedResponse(success=success)


@router.delete("/{event_id}/votes/{vote_id}", status_code=204)
def delete_vote(
    event_id: str,
    vote_id: str,
    store: Store,
    x_vote_token: str | None = Header(None, alias="X-Vote-Token"),
    x_admin_secret: str | None = Header(None, alias="X-Admin-Secret"),
) -> Response:
    logger.info("DELETE /events/%s/votes/%s", event_id, vote_id)
    store.delete_vote(event_id, vote_id, token=x_vote_token, is_admin=_is_admin(x_admin_secret))
    return Response(status_code=204)
