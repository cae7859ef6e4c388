"""Pydantic request and response models for the events API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator


class DateSlots(BaseModel):
    """One candidate date and the slots offered on it."""

    date: str
    slots: list[str]


class SlotTally(BaseModel):
    yes: int
    no: int
    voters: list[str]


class Vote(BaseModel):
    """A vote as exposed to callers. Never carries the token."""

    id: str
    name: str
    availability: dict[str, dict[str, bool]]
    created_at: datetime
    updated_at: datetime


class Event(BaseModel):
    id: str
    name: str
    creator: str
    info: Any = None
    dates: list[DateSlots]
    votes: list[Vote]
    results: dict[str, dict[str, SlotTally]]
    created_at: datetime
    updated_at: datetime


class VoteCreatedResponse(BaseModel):
    vote: Vote
    token: str


class VoteUpdatedResponse(BaseModel):
    success: bool


class CreateEventRequest(BaseModel):
    name: str
    creator: str
    info: str
    dates: list[DateSlots]

    @field_validator("name", "creator", "info")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: list[DateSlots]) -> list[DateSlots]:
        if not v:
            raise ValueError("dates must not be empty")
        return v


class UpdateEventRequest(BaseModel):
    name: str | None = None
    info: str | None = None
    dates: list[DateSlots] | None = None


class VoteRequest(BaseModel):
    name: str
    # Leaves are checked strictly by the store, so no coercion here.
    availability: dict[str, Any]


class UpdateVoteRequest(BaseModel):
    availability: dict[str, Any]
