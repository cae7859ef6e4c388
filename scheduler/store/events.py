"""In-memory event store.

``EventStore`` owns every event record and its nested votes. Each public
operation runs atomically with respect to the event it touches: a per-event
lock is held for the whole find/mutate/recompute sequence, and a registry
lock serializes creation (uniqueness scan + insert) and deletion.

Records are plain dicts. Nothing inside the store is ever returned directly;
callers receive copies produced by ``scheduler.store.sanitize``.
"""

import logging
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from scheduler.errors import ConflictError, NotFoundError, UnauthorizedError
from scheduler.store.results import recompute
from scheduler.store.sanitize import sanitize_event, sanitize_vote
from scheduler.store.tokens import authorize, issue_token
from scheduler.store.validation import (
    NAME_MAX_LENGTH,
    normalize_name,
    validate_availability,
    validate_dates,
)

logger = logging.getLogger("scheduler.store")


def _generate_id() -> str:
    return str(uuid.uuid4())


class EventStore:
    def __init__(self, name_max_length: int = NAME_MAX_LENGTH) -> None:
        self.name_max_length = name_max_length
        self._events: dict[str, dict[str, Any]] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._events)

    @contextmanager
    def _locked_event(self, event_id: str) -> Iterator[dict[str, Any] | None]:
        """Yield the raw event record with its lock held, or None if absent."""
        with self._registry_lock:
            lock = self._locks.get(event_id)
        if lock is None:
            yield None
            return
        with lock:
            # The event may have been deleted while we waited for its lock.
            yield self._events.get(event_id)

    def _normalize_event_name(self, name: Any) -> str:
        return normalize_name(name, self.name_max_length)

    def _find_raw_by_name_and_creator(self, name: str, creator: Any) -> dict[str, Any] | None:
        for event in self._events.values():
            if event["name"] == name and event["creator"] == creator:
                return event
        return None

    def _refresh(self, event: dict[str, Any], now: datetime) -> None:
        event["updated_at"] = now
        event["results"] = recompute(event)

    # Events

    def create_event(self, name: Any, creator: Any, info: Any, dates: Any) -> dict[str, Any]:
        """Create an event and return its sanitized copy.

        Raises:
            ValidationError: blank name or malformed dates.
            ConflictError: an event with the same trimmed name and creator exists.
        """
        normalized_name = self._normalize_event_name(name)
        schedule = validate_dates(dates)
        now = datetime.now(UTC)

        with self._registry_lock:
            if self._find_raw_by_name_and_creator(normalized_name, creator) is not None:
                logger.warning("Duplicate event name=%s creator=%s", normalized_name, creator)
                raise ConflictError(
                    detail="Event already exists", name=normalized_name, creator=creator
                )
            event: dict[str, Any] = {
                "id": _generate_id(),
                "name": normalized_name,
                "creator": creator,
                "info": info,
                "dates": schedule,
                "votes": [],
                "created_at": now,
                "updated_at": now,
            }
            event["results"] = recompute(event)
            self._events[event["id"]] = event
            self._locks[event["id"]] = threading.RLock()
            logger.info("Created event id=%s dates=%d", event["id"], len(schedule))
            return sanitize_event(event)

    def get_all(self) -> list[dict[str, Any]]:
        with self._registry_lock:
            snapshot = [(event_id, self._locks[event_id]) for event_id in self._events]
        result = []
        for event_id, lock in snapshot:
            with lock:
                event = self._events.get(event_id)
                if event is not None:
                    result.append(sanitize_event(event))
        return result

    def get_by_id(self, event_id: str) -> dict[str, Any] | None:
        with self._locked_event(event_id) as event:
            if event is None:
                return None
            return sanitize_event(event)

    def find_by_name_and_creator(self, name: Any, creator: Any) -> dict[str, Any] | None:
        if not isinstance(name, str):
            return None
        normalized_name = name.strip()[: self.name_max_length]
        with self._registry_lock:
            event = self._find_raw_by_name_and_creator(normalized_name, creator)
            if event is None:
                return None
            lock = self._locks[event["id"]]
        with lock:
            return sanitize_event(event)

    def update_event(
        self,
        event_id: str,
        name: Any = None,
        info: Any = None,
        dates: Any = None,
    ) -> dict[str, Any] | None:
        """Apply the truthy fields among name and info, and ``dates`` if given.

        Any ``dates`` other than None is validated, so an empty list is
        rejected rather than ignored. New dates replace the schedule wholesale.
        Votes are kept as they are; entries for slots that no longer exist
        simply stop counting. Nothing is changed if any field fails validation.
        """
        new_name = self._normalize_event_name(name) if name else None
        new_dates = validate_dates(dates) if dates is not None else None

        with self._locked_event(event_id) as event:
            if event is None:
                return None
            if new_name is not None:
                event["name"] = new_name
            if info:
                event["info"] = info
            if new_dates is not None:
                event["dates"] = new_dates
            self._refresh(event, datetime.now(UTC))
            logger.info("Updated event id=%s", event_id)
            return sanitize_event(event)

    def delete_event(self, event_id: str) -> bool:
        with self._registry_lock:
            lock = self._locks.get(event_id)
            if lock is None:
                return False
            with lock:
                del self._events[event_id]
                del self._locks[event_id]
        logger.info("Deleted event id=%s", event_id)
        return True

    # Votes

    def add_vote(self, event_id: str, name: Any, availability: Any) -> dict[str, Any]:
        """Cast a vote and return ``{"vote": <sanitized vote>, "token": <token>}``.

        The token is returned here only; it cannot be read back later.

        Raises:
            NotFoundError: unknown event.
            ValidationError: blank name or availability that does not fit the schedule.
        """
        with self._locked_event(event_id) as event:
            if event is None:
                raise NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)
            checked = validate_availability(event["dates"], availability)
            voter = normalize_name(name, self.name_max_length)

            now = datetime.now(UTC)
            token = issue_token()
            vote = {
                "id": _generate_id(),
                "name": voter,
                "availability": checked,
                "token": token,
                "created_at": now,
                "updated_at": now,
            }
            event["votes"].append(vote)
            self._refresh(event, now)
            logger.info("Added vote id=%s to event id=%s", vote["id"], event_id)
            return {"vote": sanitize_vote(vote), "token": token}

    def get_vote(self, event_id: str, vote_id: str) -> dict[str, Any]:
        with self._locked_event(event_id) as event:
            if event is None:
                raise NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)
            vote = self._find_vote(event, vote_id)
            return sanitize_vote(vote)

    def update_vote(self, event_id: str, vote_id: str, token: str | None, availability: Any) -> bool:
        """Replace a vote's availability wholesale.

        Raises:
            NotFoundError: unknown event or vote.
            UnauthorizedError: token does not match the vote.
            ValidationError: availability does not fit the current schedule.
        """
        with self._locked_event(event_id) as event:
            if event is None:
                raise NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)
            vote = self._find_vote(event, vote_id)
            if not authorize(vote, token):
                logger.warning("Rejected vote update id=%s event=%s", vote_id, event_id)
                raise UnauthorizedError(detail="Not authorized to modify this vote")
            checked = validate_availability(event["dates"], availability)

            now = datetime.now(UTC)
            vote["availability"] = checked
            vote["updated_at"] = now
            self._refresh(event, now)
            logger.info("Updated vote id=%s on event id=%s", vote_id, event_id)
            return True

    def delete_vote(
        self,
        event_id: str,
        vote_id: str,
        token: str | None = None,
        is_admin: bool = False,
    ) -> bool:
        """Remove a vote. Admins may delete without the vote's token.

        Raises:
            NotFoundError: unknown event or vote.
            UnauthorizedError: not admin and token does not match.
        """
        with self._locked_event(event_id) as event:
            if event is None:
                raise NotFoundError(detail="Event not found", error_code="EVENT_NOT_FOUND", event_id=event_id)
            vote = self._find_vote(event, vote_id)
            if not authorize(vote, token, is_admin):
                logger.warning("Rejected vote deletion id=%s event=%s", vote_id, event_id)
                raise UnauthorizedError(detail="Not authorized to delete this vote")

            event["votes"] = [v for v in event["votes"] if v is not vote]
            self._refresh(event, datetime.now(UTC))
            logger.info("Deleted vote id=%s from event id=%s admin=%s", vote_id, event_id, is_admin)
            return True

    @staticmethod
    def _find_vote(event: dict[str, Any], vote_id: str) -> dict[str, Any]:
        for vote in event["votes"]:
            if vote["id"] == vote_id:
                return vote
        raise NotFoundError(
            detail="Vote not found", error_code="VOTE_NOT_FOUND", event_id=event["id"], vote_id=vote_id
        )
