# src/e2e/test_frontend_api_json.py

import pytest

from mention_engine import Engine
from frontend.web import app as flask_app


@pytest.fixture
def client():
    import frontend.web as webmod
    webmod._engine = Engine(["Leah", "Leo", "沈知夏"])
    yield flask_app.test_client()
    webmod._engine = None


@pytest.mark.e2e
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True, "keywords": 3}


@pytest.mark.e2e
def test_fragment_endpoint(client):
    r = client.post("/api/fragment", json={"text": "ab cd", "cursor": 2})
    assert r.get_json() == {"text": "ab", "start": 0, "end": 2}
    r = client.post("/api/fragment", json={"text": "ab  cd", "cursor": 3})
    assert r.get_json() is None


@pytest.mark.e2e
def test_complete_endpoint_default_and_request_keywords(client):
    data = client.post("/api/complete", json={"text": "go Le", "cursor": 5}).get_json()
    assert [m["name"] for m in data["matches"]] == ["Leo", "Leah"]
    assert data["ghost_suffix"] == "o"

    data = client.post("/api/complete", json={"text": "沈", "keywords": [{"name": "沈知夏"}]}).get_json()
    assert data["ghost_suffix"] == "知夏"


@pytest.mark.e2e
def test_highlight_endpoint_returns_spans_and_segments(client):
    body = {"text": "他说沈知夏 and Leah", "feedback": {"start": 0, "end": 2}}
    data = client.post("/api/highlight", json=body).get_json()
    assert data["spans"] == [
        {"start": 0, "end": 2, "kind": "feedback"},
        {"start": 2, "end": 5, "kind": "keyword"},
        {"start": 10, "end": 14, "kind": "keyword"},
    ]
    assert "".join(s["text"] for s in data["segments"]) == body["text"]


@pytest.mark.e2e
def test_highlight_with_cursor_adds_ghost_segment(client):
    data = client.post("/api/highlight", json={"text": "Leah met 沈", "cursor": 10}).get_json()
    assert data["spans"] == [{"start": 0, "end": 4, "kind": "keyword"}]
    assert data["segments"][-1] == {"text": "知夏", "kind": "ghost"}


@pytest.mark.e2e
def test_accept_endpoint(client):
    data = client.post("/api/accept", json={"text": "go Le x", "cursor": 5, "name": "Leah"}).get_json()
    assert data["accepted"] is True
    assert data["text"] == "go Leah  x"
    assert data["cursor"] == 8
    assert data["feedback"] == {"start": 3, "end": 7, "kind": "feedback"}
    assert data["feedback_ms"] == 500

    data = client.post("/api/accept", json={"text": "zz", "cursor": 2}).get_json()
    assert data["accepted"] is False


@pytest.mark.e2e
def test_bad_requests_are_400(client):
    assert client.post("/api/complete", data="nope", content_type="text/plain").status_code == 400
    assert client.post("/api/complete", json={"text": 5}).status_code == 400
    assert client.post("/api/complete", json={"text": "Le", "cursor": "2"}).status_code == 400
    r = client.post("/api/accept", json={"text": "Le", "cursor": 2, "name": "Bob"})
    assert r.status_code == 400
    assert "error" in r.get_json()


@pytest.mark.e2e
def test_highlight_feedback_is_validated_and_clipped(client):
    r = client.post("/api/highlight", json={"text": "ab", "feedback": {"start": True, "end": 2}})
    assert r.status_code == 400
    data = client.post("/api/highlight", json={"text": "ab", "feedback": {"start": 0, "end": 99}}).get_json()
    assert data["spans"] == [{"start": 0, "end": 2, "kind": "feedback"}]
