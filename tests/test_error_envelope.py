from fastapi import FastAPI
from fastapi.testclient import TestClient

from partner_portal.api.errors import register_exception_handlers
from partner_portal.main import app


def test_error_responses_include_request_id_in_body_and_header(client):
    r = client.get("/this-route-does-not-exist")
    assert r.status_code == 404

    payload = r.json()
    assert "request_id" in payload
    assert payload["request_id"], payload

    assert r.headers.get("x-request-id") == payload["request_id"]


def test_caller_request_id_is_reused(client):
    r = client.get("/api/v1/partners/not-a-uuid", headers={"X-Request-ID": "req-123"})

    assert r.status_code == 400
    assert r.headers["x-request-id"] == "req-123"
    assert r.json()["request_id"] == "req-123"
    assert r.json()["errors"][0]["field"] == "partner_id"


def test_domain_errors_use_the_envelope(client):
    r = client.get("/api/v1/documents/00000000-0000-0000-0000-000000000000")
    assert r.status_code == 404
    assert r.json()["detail"] == "Document not found"
    assert r.json()["request_id"]


def test_unhandled_errors_are_500():
    boom = FastAPI()
    register_exception_handlers(boom)

    @boom.get("/boom")
    async def explode():
        raise RuntimeError("kaboom")

    r = TestClient(boom, raise_server_exceptions=False).get("/boom")
    assert r.status_code == 500
    assert r.json()["detail"] == "Internal Server Error"


def test_app_exposes_ping():
    r = TestClient(app).get("/api/v1/ping")
    assert r.json() == {"ping": "pong"}
