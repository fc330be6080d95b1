"""Tests for the HTTP surface of the action"""

import httpx
import pytest
from fastapi.testclient import TestClient

from url_signer.agents.fetchers import HttpxProber
from url_signer.api import actions
from url_signer.main import app


@pytest.fixture
def client(monkeypatch, upstream):
    monkeypatch.setattr(actions.settings, "api_key", "secret")
    monkeypatch.setattr(actions.settings, "whitelisted_domains", "acme.com")
    monkeypatch.setattr(actions.settings, "action_api_key", None)
    monkeypatch.setattr(
        actions,
        "HttpxProber",
        lambda timeout: HttpxProber(timeout=timeout, transport=httpx.MockTransport(upstream)),
    )
    return TestClient(app)


def test_healthcheck(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_list_mode_returns_signed_urls(client, upstream):
    upstream.route(
        "https://files.acme.com/f",
        httpx.Response(302, headers={"Location": "https://signed.acme.com/f"}),
    )
    resp = client.post(
        "/actions/signed-urls",
        json={"fileList": True, "file_urls": ["https://files.acme.com/f", "//cdn.bubble.io/g"]},
    )
    assert resp.status_code == 200
    assert resp.json() == {"signed_urls": ["https://signed.acme.com/f", "https://cdn.bubble.io/g"]}
    assert upstream.requests[0].headers["authorization"] == "Bearer secret"


def test_single_mode_error_payload(client):
    resp = client.post("/actions/signed-urls", json={"fileList": False, "file_url": "  "})
    assert resp.status_code == 200
    assert resp.json() == {"returned_error": True, "error_message": "At least one url should be included."}


def test_domain_violation_payload(client, upstream):
    resp = client.post("/actions/signed-urls", json={"fileList": False, "file_url": "https://other.com/f"})
    body = resp.json()
    assert body["returned_error"] is True
    assert 'URL[0] "https://other.com/f" (domain: other.com)' in body["error_message"]
    assert upstream.requests == []


def test_action_api_key_is_enforced(client, monkeypatch):
    monkeypatch.setattr(actions.settings, "action_api_key", "action-key")
    payload = {"fileList": False, "file_url": "https://cdn.bubble.io/f"}
    assert client.post("/actions/signed-urls", json=payload).status_code == 401
    resp = client.post("/actions/signed-urls", json=payload, headers={"X-API-Key": "action-key"})
    assert resp.status_code == 200
    assert resp.json() == {"signed_urls": ["https://cdn.bubble.io/f"]}
