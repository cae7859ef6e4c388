from typing import Any


def empty_tally() -> dict[str, Any]:
    return {"yes": 0, "no": 0, "voters": []}


def recompute(event: dict[str, Any]) -> dict[str, dict[str, dict[str, Any]]]:
    """Fold every vote of ``event`` into a per-slot tally.

    Only the event's current schedule is tallied. Availability entries for
    dates or slots that are no longer scheduled contribute nothing. Voters
    are listed in vote arrival order.
    """
    results: dict[str, dict[str, dict[str, Any]]] = {}
    for entry in event["dates"]:
        results[entry["date"]] = {slot: empty_tally() for slot in entry["slots"]}

    for vote in event["votes"]:
        for date, slots in vote["availability"].items():
            tallies = results.get(date)
            if tallies is None:
                continue
            for slot, value in slots.items():
                tally = tallies.get(slot)
                if tally is None:
                    continue
                if value is True:
                    tally["yes"] += 1
                    tally["voters"].append(vote["name"])
                else:
                    tally["no"] += 1
    return results
