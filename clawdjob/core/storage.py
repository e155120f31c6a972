"""Persistence for applications, activity logs, discovered jobs and agent state.

Two interchangeable backends implement the ``Storage`` interface:

* ``JsonFileStorage`` keeps one pretty-printed JSON document per entity in
  a data directory. Every read parses the whole file and every write
  rewrites it; concurrent writers race and the last write wins.
* ``DatabaseStorage`` maps the same entities onto SQLAlchemy tables, one
  select/upsert per call.

The backend is chosen once per process by ``get_storage()``: a configured
``DATABASE_URL`` selects the relational store, otherwise files are used.

Example:
    ```python
    from clawdjob.core.storage import get_storage

    storage = get_storage()
    for application in storage.get_applications():
        print(application.job.title, application.status.value)
    ```
"""
import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select

from clawdjob.core.config import get_settings
from clawdjob.core.database import get_engine, get_session_factory, session_scope
from clawdjob.core.logging import setup_logging
from clawdjob.core.models import (
    ActivityLogRecord,
    AgentStateRecord,
    ApplicationRecord,
    DiscoveredJobRecord,
)
from clawdjob.core.schemas import (
    ActivityLog,
    AgentState,
    Application,
    ApplicationStatus,
    JobListing,
    JobPlatform,
    utcnow,
)

logger = setup_logging('storage')

MAX_ACTIVITY_LOGS = 1000

APPLICATIONS_FILE = 'applications.json'
ACTIVITY_LOGS_FILE = 'activity_logs.json'
DISCOVERED_JOBS_FILE = 'discovered_jobs.json'
AGENT_STATE_FILE = 'agent_state.json'

STATE_KEY = 'default'


class Storage(ABC):
    """Persistence contract shared by both backends."""

    @abstractmethod
    def get_applications(self) -> List[Application]:
        """All applications, most recently applied first."""

    @abstractmethod
    def save_application(self, application: Application) -> None:
        """Insert or replace an application by id."""

    @abstractmethod
    def get_activity_logs(self, limit: int = 100) -> List[ActivityLog]:
        """Newest ``limit`` activity log entries, newest first."""

    @abstractmethod
    def add_activity_log(self, log: ActivityLog) -> ActivityLog:
        """Append an entry, evicting the oldest beyond ``MAX_ACTIVITY_LOGS``."""

    @abstractmethod
    def get_discovered_jobs(self) -> List[JobListing]:
        """All discovered job listings."""

    @abstractmethod
    def save_discovered_job(self, job: JobListing) -> None:
        """Store a job listing unless one with the same id or URL exists."""

    @abstractmethod
    def get_agent_state(self) -> AgentState:
        """The single agent-state record, ``idle`` if none is stored."""

    @abstractmethod
    def _write_agent_state(self, state: AgentState) -> None:
        """Persist the full agent-state record."""

    def update_application_status(
        self,
        application_id: str,
        status: Union[ApplicationStatus, str],
        response_message: Optional[str] = None,
    ) -> Optional[Application]:
        """Move an application to ``status`` and stamp the response time.

        Returns:
            The updated application, or None if no application has that id

        Raises:
            ValueError: If ``status`` is not a valid application status
        """
        status = ApplicationStatus(status)
        for application in self.get_applications():
            if application.id == application_id:
                application.status = status
                application.response_at = utcnow()
                if response_message:
                    application.response_message = response_message
                self.save_application(application)
                return application
        return None

    def set_agent_state(self, **changes: Any) -> AgentState:
        """Merge ``changes`` into the agent state and refresh ``last_active``."""
        current = self.get_agent_state()
        state = current.model_copy(update={**changes, 'last_active': utcnow()})
        self._write_agent_state(state)
        return state


class JsonFileStorage(Storage):
    """Flat-file backend: one JSON document per entity type."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _read(self, filename: str, default: Any) -> Any:
        path = self._path(filename)
        try:
            if path.exists():
                with open(path, encoding='utf-8') as f:
                    return json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {filename}: {str(e)}")
        return default

    def _write(self, filename: str, data: Any) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self._path(filename), 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    def _parse_all(self, model, rows: List[dict], filename: str) -> list:
        items = []
        for row in rows:
            try:
                items.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid record in {filename}: {str(e)}")
        return items

    def get_applications(self) -> List[Application]:
        rows = self._read(APPLICATIONS_FILE, [])
        applications = self._parse_all(Application, rows, APPLICATIONS_FILE)
        return sorted(applications, key=lambda a: a.applied_at, reverse=True)

    def save_application(self, application: Application) -> None:
        rows = self._read(APPLICATIONS_FILE, [])
        data = application.to_json_dict()

        for index, row in enumerate(rows):
            if row.get('id') == application.id:
                rows[index] = data
                break
        else:
            rows.append(data)

        self._write(APPLICATIONS_FILE, rows)

    def get_activity_logs(self, limit: int = 100) -> List[ActivityLog]:
        rows = self._read(ACTIVITY_LOGS_FILE, [])
        logs = self._parse_all(ActivityLog, rows, ACTIVITY_LOGS_FILE)
        # Rows are in append order; reverse first so ties stay newest first.
        logs.reverse()
        logs.sort(key=lambda log: log.timestamp, reverse=True)
        return logs[:max(limit, 0)]

    def add_activity_log(self, log: ActivityLog) -> ActivityLog:
        rows = self._read(ACTIVITY_LOGS_FILE, [])
        rows.append(log.to_json_dict())

        if len(rows) > MAX_ACTIVITY_LOGS:
            del rows[:len(rows) - MAX_ACTIVITY_LOGS]

        self._write(ACTIVITY_LOGS_FILE, rows)
        return log

    def get_discovered_jobs(self) -> List[JobListing]:
        rows = self._read(DISCOVERED_JOBS_FILE, [])
        return self._parse_all(JobListing, rows, DISCOVERED_JOBS_FILE)

    def save_discovered_job(self, job: JobListing) -> None:
        rows = self._read(DISCOVERED_JOBS_FILE, [])
        if any(row.get('id') == job.id or row.get('url') == job.url for row in rows):
            return
        rows.append(job.to_json_dict())
        self._write(DISCOVERED_JOBS_FILE, rows)

    def get_agent_state(self) -> AgentState:
        data = self._read(AGENT_STATE_FILE, None)
        if data:
            try:
                return AgentState.model_validate(data)
            except ValidationError as e:
                logger.error(f"Invalid agent state in {AGENT_STATE_FILE}: {str(e)}")
        return AgentState()

    def _write_agent_state(self, state: AgentState) -> None:
        self._write(AGENT_STATE_FILE, state.to_json_dict())


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class DatabaseStorage(Storage):
    """Relational backend on SQLAlchemy.

    Read failures are logged and produce empty results. A failed
    ``save_application`` is re-raised; other failed writes are logged
    and dropped.
    """

    def __init__(self, database_url: str):
        self.engine = get_engine(database_url)
        self.session_factory = get_session_factory(self.engine)

    @staticmethod
    def _to_application(row: ApplicationRecord) -> Application:
        job_data = row.job_data or {}
        job = JobListing(
            id=row.job_id,
            title=row.job_title,
            company=row.job_company,
            location=row.job_location or 'Remote',
            url=row.job_url,
            description=row.job_description or '',
            requirements=job_data.get('requirements') or [],
            platform=job_data.get('platform') or JobPlatform.OTHER,
            salary=job_data.get('salary'),
            posted_at=job_data.get('posted_at') or _aware(row.applied_at),
            discovered_at=job_data.get('discovered_at') or _aware(row.applied_at),
        )
        return Application(
            id=row.id,
            agent_id=row.agent_id,
            job_id=row.job_id,
            job=job,
            status=row.status,
            cover_letter=row.cover_letter,
            applied_at=_aware(row.applied_at),
            response_at=_aware(row.response_at),
            response_message=row.response_message,
            interview_date=_aware(row.interview_date),
            notes=job_data.get('notes'),
        )

    @staticmethod
    def _to_job(row: DiscoveredJobRecord) -> JobListing:
        return JobListing(
            id=row.id,
            title=row.title,
            company=row.company,
            location=row.location or 'Remote',
            url=row.url,
            description=row.description or '',
            salary=row.salary,
            requirements=row.requirements or [],
            platform=row.platform or JobPlatform.OTHER,
            posted_at=_aware(row.posted_at or row.discovered_at),
            discovered_at=_aware(row.discovered_at),
        )

    def get_applications(self) -> List[Application]:
        try:
            with session_scope(self.session_factory) as session:
                rows = session.scalars(
                    select(ApplicationRecord).order_by(ApplicationRecord.applied_at.desc())
                ).all()
                return [self._to_application(row) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching applications from database: {str(e)}")
            return []

    def save_application(self, application: Application) -> None:
        job = application.job
        record = ApplicationRecord(
            id=application.id,
            agent_id=application.agent_id,
            job_id=application.job_id,
            job_title=job.title,
            job_company=job.company,
            job_location=job.location,
            job_url=job.url,
            job_description=job.description,
            status=application.status.value,
            applied_at=application.applied_at,
            response_at=application.response_at,
            response_message=application.response_message,
            interview_date=application.interview_date,
            cover_letter=application.cover_letter,
            job_data={
                'requirements': job.requirements,
                'platform': job.platform.value,
                'salary': job.salary,
                'posted_at': _iso(job.posted_at),
                'discovered_at': _iso(job.discovered_at),
                'notes': application.notes,
            },
        )
        try:
            with session_scope(self.session_factory) as session:
                session.merge(record)
        except Exception as e:
            logger.error(f"Error saving application to database: {str(e)}")
            raise

    def get_activity_logs(self, limit: int = 100) -> List[ActivityLog]:
        try:
            with session_scope(self.session_factory) as session:
                rows = session.scalars(
                    select(ActivityLogRecord)
                    .order_by(ActivityLogRecord.timestamp.desc())
                    .limit(max(limit, 0))
                ).all()
                return [
                    ActivityLog(
                        id=row.id,
                        agent_id=row.agent_id,
                        type=row.type,
                        message=row.message,
                        details=row.metadata_ or None,
                        timestamp=_aware(row.timestamp),
                    )
                    for row in rows
                ]
        except Exception as e:
            logger.error(f"Error fetching activity logs from database: {str(e)}")
            return []

    def add_activity_log(self, log: ActivityLog) -> ActivityLog:
        try:
            with session_scope(self.session_factory) as session:
                session.add(ActivityLogRecord(
                    id=log.id,
                    agent_id=log.agent_id,
                    type=log.type.value,
                    message=log.message,
                    timestamp=log.timestamp,
                    metadata_=log.details or {},
                ))
                session.flush()

                stale_ids = session.scalars(
                    select(ActivityLogRecord.id)
                    .order_by(ActivityLogRecord.timestamp.desc())
                    .offset(MAX_ACTIVITY_LOGS)
                ).all()
                for stale_id in stale_ids:
                    session.delete(session.get(ActivityLogRecord, stale_id))
        except Exception as e:
            logger.error(f"Error saving activity log to database: {str(e)}")
        return log

    def get_discovered_jobs(self) -> List[JobListing]:
        try:
            with session_scope(self.session_factory) as session:
                rows = session.scalars(
                    select(DiscoveredJobRecord).order_by(DiscoveredJobRecord.discovered_at.desc())
                ).all()
                return [self._to_job(row) for row in rows]
        except Exception as e:
            logger.error(f"Error fetching discovered jobs from database: {str(e)}")
            return []

    def save_discovered_job(self, job: JobListing) -> None:
        try:
            with session_scope(self.session_factory) as session:
                existing = session.scalars(
                    select(DiscoveredJobRecord.id).where(
                        (DiscoveredJobRecord.url == job.url) | (DiscoveredJobRecord.id == job.id)
                    )
                ).first()
                if existing:
                    return
                session.add(DiscoveredJobRecord(
                    id=job.id,
                    title=job.title,
                    company=job.company,
                    location=job.location,
                    url=job.url,
                    description=job.description,
                    salary=job.salary,
                    requirements=job.requirements,
                    platform=job.platform.value,
                    posted_at=job.posted_at,
                    discovered_at=job.discovered_at,
                    job_data=job.to_json_dict(),
                ))
        except Exception as e:
            logger.error(f"Error saving discovered job to database: {str(e)}")

    def get_agent_state(self) -> AgentState:
        try:
            with session_scope(self.session_factory) as session:
                row = session.get(AgentStateRecord, STATE_KEY)
                if row is not None:
                    return AgentState(
                        status=row.status,
                        last_active=_aware(row.last_active),
                        current_task=row.current_task,
                    )
        except Exception as e:
            logger.error(f"Error fetching agent state from database: {str(e)}")
        return AgentState()

    def _write_agent_state(self, state: AgentState) -> None:
        try:
            with session_scope(self.session_factory) as session:
                session.merge(AgentStateRecord(
                    agent_id=STATE_KEY,
                    status=state.status.value,
                    last_active=state.last_active,
                    current_task=state.current_task,
                    state_data=state.to_json_dict(),
                ))
        except Exception as e:
            logger.error(f"Error saving agent state to database: {str(e)}")


_storage: Optional[Storage] = None


def create_storage() -> Storage:
    """Build the backend selected by the current settings."""
    settings = get_settings()
    if settings.use_database:
        logger.info("Using relational store for persistence")
        return DatabaseStorage(settings.database_url)
    logger.info(f"Using JSON files in {settings.data_dir} for persistence")
    return JsonFileStorage(settings.data_dir)


def get_storage() -> Storage:
    """Process-wide storage backend, created on first use."""
    global _storage
    if _storage is None:
        _storage = create_storage()
    return _storage


def set_storage(storage: Optional[Storage]) -> None:
    """Install a storage backend. Passing None re-selects on next use."""
    global _storage
    _storage = storage
