"""Root conftest.py to configure test environment."""
import sys
from pathlib import Path

import pytest

# Add the root directory to Python path for proper imports
root_dir = Path(__file__).parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


def pytest_configure(config):
    config.addinivalue_line("markers", "api: tests of the HTTP endpoints")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary data directory, no LLM and no delays."""
    from clawdjob.core.config import Settings, override_settings

    test_settings = Settings(data_dir=tmp_path / "data", hunt_delay_seconds=0)
    override_settings(test_settings)
    yield test_settings
    override_settings(None)


@pytest.fixture
def json_storage(settings):
    """Flat-file storage in the temporary data directory."""
    from clawdjob.core.storage import JsonFileStorage, set_storage

    storage = JsonFileStorage(settings.data_dir)
    set_storage(storage)
    yield storage
    set_storage(None)
