"""SQLAlchemy models of the relational store."""
from sqlalchemy import JSON, Column, DateTime, String, Text

from clawdjob.core.database import Base


class ApplicationRecord(Base):
    """Application row; job fields are flattened, the rest lives in ``job_data``."""
    __tablename__ = 'applications'

    id = Column(String, primary_key=True)
    agent_id = Column(String, nullable=False, index=True)
    job_id = Column(String, nullable=False)
    job_title = Column(String, nullable=False)
    job_company = Column(String, nullable=False)
    job_location = Column(String)
    job_url = Column(String, nullable=False)
    job_description = Column(Text)
    status = Column(String, nullable=False, default='applied')
    applied_at = Column(DateTime(timezone=True), nullable=False)
    response_at = Column(DateTime(timezone=True))
    response_message = Column(Text)
    interview_date = Column(DateTime(timezone=True))
    cover_letter = Column(Text)
    job_data = Column(JSON, default=dict)


class ActivityLogRecord(Base):
    """Activity feed entry."""
    __tablename__ = 'activity_logs'

    id = Column(String, primary_key=True)
    agent_id = Column(String, nullable=False)
    type = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    metadata_ = Column('metadata', JSON, default=dict)


class DiscoveredJobRecord(Base):
    """Job listing seen during a hunt cycle, unique by URL."""
    __tablename__ = 'discovered_jobs'

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    location = Column(String)
    url = Column(String, nullable=False, unique=True)
    description = Column(Text)
    salary = Column(String)
    requirements = Column(JSON, default=list)
    platform = Column(String, default='other')
    posted_at = Column(DateTime(timezone=True))
    discovered_at = Column(DateTime(timezone=True), nullable=False)
    job_data = Column(JSON, default=dict)


class AgentStateRecord(Base):
    """The single agent-state row, keyed by ``agent_id='default'``."""
    __tablename__ = 'agent_state'

    agent_id = Column(String, primary_key=True, default='default')
    status = Column(String, nullable=False, default='idle')
    last_active = Column(DateTime(timezone=True), nullable=False)
    current_task = Column(Text)
    state_data = Column(JSON, default=dict)
