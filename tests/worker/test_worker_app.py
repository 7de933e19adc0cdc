"""
Test suite for the ingestion worker HTTP surface.

System role: Verification of the worker RPC routes
"""

import pytest
from fastapi.testclient import TestClient

from docman.ingestion_worker.app import create_worker_app
from docman.ingestion_worker.engine import IngestionWorkerEngine


@pytest.fixture
def engine(fixed_random) -> IngestionWorkerEngine:
    """Engine whose completions never fire during a test."""
    return IngestionWorkerEngine(rng=fixed_random(delay=60))


@pytest.fixture
def client(engine):
    with TestClient(create_worker_app(engine)) as test_client:
        yield test_client


def test_start_returns_processing(client):
    response = client.post("/ingestion", json={"id": "job-1", "name": "a"})

    assert response.status_code == 200
    assert response.json() == {"status": "Processing"}


def test_start_accepts_numeric_id(client, engine):
    response = client.post("/ingestion", json={"id": 7, "name": "a"})

    assert response.status_code == 200
    assert response.json() == {"status": "Processing"}
    assert client.get("/status/7").json() == {"status": "Processing"}
    assert engine.has_pending_completion("7")


def test_start_rejects_boolean_id(client):
    response = client.post("/ingestion", json={"id": True})

    assert response.status_code == 422


def test_start_requires_id(client):
    response = client.post("/ingestion", json={"name": "a"})

    assert response.status_code == 422


def test_status_of_unknown_job_is_not_found(client):
    response = client.get("/status/missing")

    assert response.status_code == 200
    assert response.json() == {"status": "Not Found"}


def test_control_routes_follow_state_table(client):
    client.post("/ingestion", json={"id": "job-1"})

    assert client.get("/pause/job-1").json() == {"status": "Paused"}
    assert client.get("/status/job-1").json() == {"status": "Paused"}
    assert client.get("/resume/job-1").json() == {"status": "Processing"}
    assert client.get("/cancel/job-1").json() == {"status": "Cancelled"}
    # Terminal: further control is a no-op
    assert client.get("/resume/job-1").json() == {"status": "Cancelled"}
    assert client.get("/retry/job-1").json() == {"status": "Cancelled"}


def test_cancel_invalidates_pending_completion(client, engine):
    client.post("/ingestion", json={"id": "job-1"})
    assert engine.has_pending_completion("job-1")

    client.get("/cancel/job-1")

    assert not engine.has_pending_completion("job-1")


def test_embedding_is_fixed(client):
    first = client.get("/embedding/job-1")
    second = client.get("/embedding/job-1")

    assert first.status_code == 200
    assert first.json() == second.json() == [0.1, 0.2, 0.3, 0.4, 0.5]


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_correlation_id_is_echoed(client):
    response = client.get("/status/job-1", headers={"X-Correlation-ID": "corr-1"})

    assert response.headers["X-Correlation-ID"] == "corr-1"


def test_strict_worker_answers_conflict(fixed_random):
    engine = IngestionWorkerEngine(strict_transitions=True, rng=fixed_random(delay=60))

    with TestClient(create_worker_app(engine)) as client:
        client.post("/ingestion", json={"id": "job-1"})
        response = client.get("/resume/job-1")

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["current_status"] == "Processing"
    assert detail["event"] == "resume"
