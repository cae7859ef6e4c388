"""Copies of store records that are safe to hand to callers.

Sanitized records never carry a vote ``token`` and share no mutable state
with the store.
"""

import copy
from typing import Any


def sanitize_vote(vote: dict[str, Any]) -> dict[str, Any]:
    return {
        key: copy.deepcopy(value)
        for key, value in vote.items()
        if key != "token"
    }


def sanitize_event(event: dict[str, Any]) -> dict[str, Any]:
    safe = {key: value for key, value in event.items() if key not in ("dates", "votes", "results")}
    safe["info"] = copy.deepcopy(event.get("info"))
    safe["dates"] = [{"date": d["date"], "slots": list(d["slots"])} for d in event["dates"]]
    safe["votes"] = [sanitize_vote(v) for v in event["votes"]]
    safe["results"] = copy.deepcopy(event["results"])
    return safe
