from datetime import UTC, datetime

from scheduler.store.sanitize import sanitize_event, sanitize_vote


def _raw_event():
    now = datetime.now(UTC)
    return {
        "id": "e1",
        "name": "Trip",
        "creator": "alice",
        "info": {"notes": ["bring snacks"]},
        "dates": [{"date": "2024-06-01", "slots": ["10:00"]}],
        "votes": [
            {
                "id": "v1",
                "name": "bob",
                "availability": {"2024-06-01": {"10:00": True}},
                "token": "secret",
                "created_at": now,
                "updated_at": now,
            }
        ],
        "results": {"2024-06-01": {"10:00": {"yes": 1, "no": 0, "voters": ["bob"]}}},
        "created_at": now,
        "updated_at": now,
    }


class TestSanitizeVote:
    def test_drops_token(self):
        vote = _raw_event()["votes"][0]
        safe = sanitize_vote(vote)
        assert "token" not in safe
        assert safe["id"] == "v1"
        assert "token" in vote

    def test_availability_is_copied(self):
        vote = _raw_event()["votes"][0]
        safe = sanitize_vote(vote)
        safe["availability"]["2024-06-01"]["10:00"] = False
        assert vote["availability"]["2024-06-01"]["10:00"] is True


class TestSanitizeEvent:
    def test_no_tokens(self):
        safe = sanitize_event(_raw_event())
        assert all("token" not in v for v in safe["votes"])

    def test_nested_structures_are_copied(self):
        raw = _raw_event()
        safe = sanitize_event(raw)

        safe["dates"][0]["slots"].append("11:00")
        safe["results"]["2024-06-01"]["10:00"]["voters"].append("mallory")
        safe["votes"][0]["availability"]["2024-06-01"]["10:00"] = False
        safe["info"]["notes"].clear()
        safe["votes"].clear()

        assert raw["dates"][0]["slots"] == ["10:00"]
        assert raw["results"]["2024-06-01"]["10:00"]["voters"] == ["bob"]
        assert raw["votes"][0]["availability"]["2024-06-01"]["10:00"] is True
        assert raw["info"] == {"notes": ["bring snacks"]}
        assert len(raw["votes"]) == 1
