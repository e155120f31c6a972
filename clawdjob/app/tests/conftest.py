"""Test configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient

from clawdjob.app.dependencies import get_hunter, get_store
from clawdjob.app.main import app
from clawdjob.core.identity import generate_agent_identity
from clawdjob.features.job_search.analysis import JobAnalyzer
from clawdjob.features.job_search.hunter import HuntGuard, JobHunter


async def no_live_jobs():
    return []


@pytest.fixture
def hunter(json_storage):
    """Hunter that never touches the network."""
    return JobHunter(
        storage=json_storage,
        analyzer=JobAnalyzer(generate_agent_identity(42)),
        search=no_live_jobs,
        guard=HuntGuard(),
        delay_seconds=0,
    )


@pytest.fixture
def client(json_storage, hunter):
    """Create test client backed by a temporary flat-file store."""
    app.dependency_overrides[get_store] = lambda: json_storage
    app.dependency_overrides[get_hunter] = lambda: hunter

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def broken_storage(json_storage, monkeypatch):
    """Storage whose reads and writes all fail."""
    def fail(*args, **kwargs):
        raise IOError("storage unavailable")

    for name in ("get_applications", "get_activity_logs", "add_activity_log",
                 "get_agent_state", "update_application_status"):
        monkeypatch.setattr(json_storage, name, fail)
    return json_storage
