"""Tests for the hunt endpoint."""
import pytest


@pytest.mark.api
def test_run_hunt(client, json_storage):
    """With no live jobs the cycle falls back to demo listings."""
    response = client.post("/api/hunt")
    assert response.status_code == 200
    data = response.json()

    assert data["success"] is True
    assert data["jobsFound"] == 5
    assert data["applicationsSubmitted"] <= 3
    assert data["skipped"] is False
    assert data["logs"][0]["type"] == "search_started"

    assert json_storage.get_agent_state().status.value == "waiting"
    assert len(json_storage.get_applications()) == data["applicationsSubmitted"]


@pytest.mark.api
def test_run_hunt_while_running(client, hunter):
    assert hunter.guard.acquire()
    try:
        response = client.post("/api/hunt")
    finally:
        hunter.guard.release()

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["skipped"] is True
    assert data["jobsFound"] == 0


@pytest.mark.api
def test_run_hunt_failure(client, broken_storage):
    response = client.post("/api/hunt")
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Job hunting cycle failed"
    assert data["details"] == "storage unavailable"
