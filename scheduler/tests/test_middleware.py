"""Tests for the debug access log middleware."""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from scheduler.middleware import REQUEST_ID_HEADER, HTTPLogMiddleware


@pytest.fixture
def app_client():
    app = FastAPI()
    app.add_middleware(HTTPLogMiddleware)

    @app.delete("/votes/{vote_id}")
    def delete_vote(vote_id: str):
        return {"deleted": vote_id}

    return TestClient(app)


class TestHTTPLogMiddleware:
    def test_generates_request_id(self, app_client):
        res = app_client.delete("/votes/v1")
        assert res.status_code == 200
        assert len(res.headers[REQUEST_ID_HEADER]) == 32

    def test_echoes_incoming_request_id(self, app_client):
        res = app_client.delete("/votes/v1", headers={REQUEST_ID_HEADER: "abc-123"})
        assert res.headers[REQUEST_ID_HEADER] == "abc-123"

    def test_secrets_stay_out_of_the_log(self, app_client, caplog):
        """Only the presence of credential headers is logged."""
        with caplog.at_level(logging.DEBUG, logger="scheduler.http"):
            app_client.delete(
                "/votes/v1",
                headers={"X-Vote-Token": "tok-value", "X-Admin-Secret": "admin-value"},
            )

        text = caplog.text
        assert "tok-value" not in text
        assert "admin-value" not in text
        assert "credentials=x-vote-token,x-admin-secret" in text
        assert "status=200" in text
