"""Fixtures shared by the library tests."""
import pytest

from clawdjob.core.identity import generate_agent_identity
from clawdjob.core.storage import DatabaseStorage, JsonFileStorage


@pytest.fixture(params=["json", "sqlite"])
def storage(request, tmp_path, settings):
    """Each storage backend in turn."""
    if request.param == "json":
        return JsonFileStorage(tmp_path / "data")
    return DatabaseStorage(f"sqlite:///{tmp_path / 'clawdjob.db'}")


@pytest.fixture
def agent():
    return generate_agent_identity(42)
