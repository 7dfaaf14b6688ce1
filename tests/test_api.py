from fastapi.testclient import TestClient

from mudclient.config import MAX_SPEEDWALK_STEPS
from mudclient.main import app

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_speedwalk_endpoint():
    r = client.get("/api/speedwalk", params={"path": "2e,w,ne", "backwards": "true"})
    assert r.status_code == 200
    assert r.json() == {"steps": ["southwest", "east", "west", "west"]}


def test_speedwalk_endpoint_is_capped():
    r = client.get("/api/speedwalk", params={"path": "99999999999e"})
    assert r.status_code == 200
    assert len(r.json()["steps"]) == MAX_SPEEDWALK_STEPS


def test_speedwalk_requires_path():
    r = client.get("/api/speedwalk")
    assert r.status_code == 422


def test_no_script_execution_over_http():
    body = {"input": "x", "rules": [{"name": "x", "pattern": "^x$", "command": 'send("x")'}]}
    assert client.post("/api/patterns/aliases", json=body).status_code == 404
    assert client.post("/api/patterns/triggers", json=body).status_code == 404


def test_log_stream_is_not_served():
    assert client.get("/api/logs/stream").status_code == 404
