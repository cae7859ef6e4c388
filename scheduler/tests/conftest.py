import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import pytest
from fastapi.testclient import TestClient

import scheduler.main as main
from scheduler.store import EventStore


TRIP_DATES = [{"date": "2024-06-01", "slots": ["10:00", "14:00"]}]


@pytest.fixture
def store():
    return EventStore()


@pytest.fixture
def trip(store):
    return store.create_event(name="Trip", creator="alice", info="Summer trip", dates=TRIP_DATES)


@pytest.fixture
def client():
    with TestClient(main.app) as c:
        yield c
