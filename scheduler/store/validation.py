"""Structural checks for event schedules, vote availability and names.

All functions are pure: they either return a normalized copy of their input
or raise a ``ValidationError`` subclass from ``scheduler.errors``.
"""

from collections.abc import Mapping
from typing import Any

from scheduler.errors import (
    InvalidAvailability,
    InvalidDate,
    InvalidSlot,
    InvalidValue,
    ValidationError,
)

NAME_MAX_LENGTH = 50


def normalize_name(name: Any, max_length: int = NAME_MAX_LENGTH) -> str:
    """Trim and truncate a display name, rejecting blank ones."""
    if not isinstance(name, str):
        raise ValidationError(detail="Name must be a string", error_code="INVALID_NAME")
    normalized = name.strip()[:max_length]
    if not normalized:
        raise ValidationError(detail="Name must not be empty", error_code="INVALID_NAME")
    return normalized


def validate_dates(dates: Any) -> list[dict[str, Any]]:
    """Validate a schedule and return a fresh normalized copy of it.

    A schedule is a non-empty sequence of ``{"date": str, "slots": [str, ...]}``
    entries. Every date needs at least one slot. Duplicate slots within a date
    are collapsed keeping first-seen order; a date may appear only once.

    Raises:
        ValidationError: with ``error_code="INVALID_DATES"`` on any violation.
    """
    if not isinstance(dates, (list, tuple)) or len(dates) == 0:
        raise ValidationError(detail="Dates must be a non-empty list", error_code="INVALID_DATES")

    normalized: list[dict[str, Any]] = []
    seen_dates: set[str] = set()
    for entry in dates:
        if not isinstance(entry, Mapping):
            raise ValidationError(detail="Invalid date entry", error_code="INVALID_DATES")
        date = entry.get("date")
        slots = entry.get("slots")
        if not isinstance(date, str) or not date:
            raise ValidationError(detail="Date must be a non-empty string", error_code="INVALID_DATES")
        if date in seen_dates:
            raise ValidationError(detail=f"Duplicate date: {date}", error_code="INVALID_DATES", date=date)
        if not isinstance(slots, (list, tuple, set, frozenset)) or len(slots) == 0:
            raise ValidationError(
                detail=f"Date {date} must have at least one slot", error_code="INVALID_DATES", date=date
            )
        if not all(isinstance(slot, str) for slot in slots):
            raise ValidationError(
                detail=f"Slots for {date} must be strings", error_code="INVALID_DATES", date=date
            )
        seen_dates.add(date)
        normalized.append({"date": date, "slots": list(dict.fromkeys(slots))})
    return normalized


def validate_availability(dates: list[dict[str, Any]], availability: Any) -> dict[str, dict[str, bool]]:
    """Check an availability mapping against an event's current schedule.

    Every date key must be scheduled, every slot key must belong to that
    date, and every leaf must be a real ``bool``. Returns a deep copy so the
    caller's object is never stored.

    Raises:
        InvalidAvailability: empty or non-mapping availability.
        InvalidDate: a date that is not in the schedule.
        InvalidSlot: a slot that is not offered on that date.
        InvalidValue: a leaf that is not strictly boolean.
    """
    if not isinstance(availability, Mapping) or len(availability) == 0:
        raise InvalidAvailability(detail="Availability must be a non-empty mapping")

    schedule = {d["date"]: d["slots"] for d in dates}
    checked: dict[str, dict[str, bool]] = {}
    for date, slots in availability.items():
        if date not in schedule:
            raise InvalidDate(detail=f"Invalid date: {date}", date=date)
        if not isinstance(slots, Mapping):
            raise InvalidAvailability(detail=f"Availability for {date} must be a mapping", date=date)
        checked[date] = {}
        for slot, value in slots.items():
            if slot not in schedule[date]:
                raise InvalidSlot(detail=f"Invalid slot: {slot}", date=date, slot=slot)
            if not isinstance(value, bool):
                raise InvalidValue(detail=f"Invalid value for {date} - {slot}", date=date, slot=slot)
            checked[date][slot] = value
    return checked
