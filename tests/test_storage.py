"""Tests for both storage backends."""
import json
from datetime import timedelta

import pytest

from clawdjob.core import storage as storage_module
from clawdjob.core.config import Settings, override_settings
from clawdjob.core.identity import AGENT_ID
from clawdjob.core.schemas import ActivityLog, ActivityType, AgentStatus, ApplicationStatus, utcnow
from clawdjob.core.storage import (
    ACTIVITY_LOGS_FILE,
    DatabaseStorage,
    JsonFileStorage,
    MAX_ACTIVITY_LOGS,
    create_storage,
)
from tests.factories import make_application, make_job


BASE_TIME = utcnow() - timedelta(days=1)


def make_log(index: int) -> ActivityLog:
    return ActivityLog(
        timestamp=BASE_TIME + timedelta(seconds=index),
        id=f"log-{index}",
        agent_id=AGENT_ID,
        type=ActivityType.THINKING,
        message=f"thought {index}",
    )


def test_empty_store(storage):
    assert storage.get_applications() == []
    assert storage.get_activity_logs() == []
    assert storage.get_discovered_jobs() == []
    assert storage.get_agent_state().status == AgentStatus.IDLE


def test_save_and_get_application(storage):
    storage.save_application(make_application(1, age_hours=5))
    storage.save_application(make_application(2, age_hours=1))

    applications = storage.get_applications()
    assert [app.id for app in applications] == ["app-2", "app-1"]
    assert applications[1].job.url == "https://jobs.example/1"
    assert applications[1].cover_letter == "Dear Hiring Manager,"


def test_save_application_replaces_by_id(storage):
    application = make_application(1)
    storage.save_application(application)
    application.notes = "followed up"
    storage.save_application(application)

    applications = storage.get_applications()
    assert len(applications) == 1
    assert applications[0].notes == "followed up"


def test_update_application_status(storage):
    storage.save_application(make_application(1))
    storage.save_application(make_application(2))

    updated = storage.update_application_status("app-1", "interview_scheduled", "See you Monday")

    assert updated.status == ApplicationStatus.INTERVIEW_SCHEDULED
    matching = [app for app in storage.get_applications() if app.id == "app-1"]
    assert len(matching) == 1
    assert matching[0].status == ApplicationStatus.INTERVIEW_SCHEDULED
    assert matching[0].response_at is not None
    assert matching[0].response_message == "See you Monday"


def test_update_unknown_application(storage):
    assert storage.update_application_status("app-missing", ApplicationStatus.REJECTED) is None


def test_update_rejects_invalid_status(storage):
    storage.save_application(make_application(1))
    with pytest.raises(ValueError):
        storage.update_application_status("app-1", "hired")


def test_activity_logs_newest_first(storage):
    for index in range(5):
        storage.add_activity_log(make_log(index))

    logs = storage.get_activity_logs(limit=3)
    assert len(logs) == 3
    assert logs[0].timestamp >= logs[1].timestamp >= logs[2].timestamp
    assert logs[0].id == "log-4"


def test_activity_log_retention(storage, monkeypatch):
    monkeypatch.setattr(storage_module, "MAX_ACTIVITY_LOGS", 5)
    for index in range(8):
        storage.add_activity_log(make_log(index))

    ids = {log.id for log in storage.get_activity_logs(limit=100)}
    assert ids == {f"log-{index}" for index in range(3, 8)}


def test_json_activity_log_cap_at_default_limit(tmp_path):
    store = JsonFileStorage(tmp_path)
    rows = [make_log(index).to_json_dict() for index in range(MAX_ACTIVITY_LOGS)]
    (tmp_path / ACTIVITY_LOGS_FILE).write_text(json.dumps(rows))

    for index in range(MAX_ACTIVITY_LOGS, MAX_ACTIVITY_LOGS + 3):
        store.add_activity_log(make_log(index))

    stored = json.loads((tmp_path / ACTIVITY_LOGS_FILE).read_text())
    assert len(stored) == MAX_ACTIVITY_LOGS
    assert stored[0]["id"] == "log-3"
    assert stored[-1]["id"] == f"log-{MAX_ACTIVITY_LOGS + 2}"


def test_discovered_jobs_unique_by_url(storage):
    storage.save_discovered_job(make_job(1))
    duplicate = make_job(1)
    duplicate.id = "job-other"
    storage.save_discovered_job(duplicate)
    storage.save_discovered_job(make_job(2))

    urls = [job.url for job in storage.get_discovered_jobs()]
    assert sorted(urls) == ["https://jobs.example/1", "https://jobs.example/2"]


def test_agent_state_merges_changes(storage):
    storage.set_agent_state(status=AgentStatus.SEARCHING, current_task="Searching...")
    first = storage.get_agent_state()
    storage.set_agent_state(status=AgentStatus.WAITING)
    second = storage.get_agent_state()

    assert first.status == AgentStatus.SEARCHING
    assert second.status == AgentStatus.WAITING
    assert second.current_task == "Searching..."
    assert second.last_active >= first.last_active


def test_json_files_are_pretty_printed(tmp_path):
    store = JsonFileStorage(tmp_path)
    store.save_application(make_application(1))
    store.set_agent_state(status=AgentStatus.APPLYING)

    content = (tmp_path / "applications.json").read_text()
    assert content.startswith("[\n  {")
    assert json.loads(content)[0]["appliedAt"]
    assert json.loads((tmp_path / "agent_state.json").read_text())["status"] == "applying"


def test_json_corrupt_file_reads_as_empty(tmp_path):
    (tmp_path / "applications.json").write_text("{not json")
    assert JsonFileStorage(tmp_path).get_applications() == []


def test_database_single_agent_state_row(tmp_path):
    store = DatabaseStorage(f"sqlite:///{tmp_path / 'state.db'}")
    for status in (AgentStatus.SEARCHING, AgentStatus.APPLYING, AgentStatus.WAITING):
        store.set_agent_state(status=status)

    from clawdjob.core.database import session_scope
    from clawdjob.core.models import AgentStateRecord

    with session_scope(store.session_factory) as session:
        assert session.query(AgentStateRecord).count() == 1


def test_database_read_failure_returns_empty(tmp_path):
    store = DatabaseStorage(f"sqlite:///{tmp_path / 'broken.db'}")
    with store.engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE applications")

    assert store.get_applications() == []
    with pytest.raises(Exception):
        store.save_application(make_application(1))


def test_create_storage_follows_settings(tmp_path):
    override_settings(Settings(data_dir=tmp_path))
    try:
        assert isinstance(create_storage(), JsonFileStorage)
        override_settings(Settings(database_url=f"sqlite:///{tmp_path / 'x.db'}"))
        assert isinstance(create_storage(), DatabaseStorage)
    finally:
        override_settings(None)


def test_activity_log_without_details(storage):
    storage.add_activity_log(make_log(1))

    assert storage.get_activity_logs()[0].details is None
