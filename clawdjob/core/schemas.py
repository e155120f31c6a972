"""Core Pydantic models shared by the agent, the storage layer and the API.

Python attributes are snake_case; the JSON form uses camelCase aliases
(``appliedAt``, ``coverLetter`` ...) because that is what the dashboard
polls for. Dump with ``model_dump(by_alias=True, mode='json')`` when
writing to disk or returning from an endpoint.

Example:
    ```python
    from clawdjob.core.schemas import Application, ApplicationStatus

    app = Application.model_validate(payload)
    if app.status == ApplicationStatus.OFFER_RECEIVED:
        ...
    ```
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Timezone-aware current time."""
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Generate a prefixed unique identifier such as ``app-1f3c...``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict using the wire field names."""
        return self.model_dump(by_alias=True, mode='json')


class AgentStatus(str, Enum):
    """Runtime status of the agent.

    ``INTERVIEWING`` exists for the dashboard but no hunt cycle sets it.
    """
    IDLE = "idle"
    SEARCHING = "searching"
    APPLYING = "applying"
    WAITING = "waiting"
    INTERVIEWING = "interviewing"


class ApplicationStatus(str, Enum):
    """Lifecycle status of a submitted application."""
    APPLIED = "applied"
    VIEWED = "viewed"
    IN_REVIEW = "in_review"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEWED = "interviewed"
    OFFER_RECEIVED = "offer_received"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    NO_RESPONSE = "no_response"


class JobPlatform(str, Enum):
    """Job board a listing was found on."""
    LINKEDIN = "linkedin"
    INDEED = "indeed"
    GLASSDOOR = "glassdoor"
    REMOTEOK = "remoteok"
    WEWORKREMOTELY = "weworkremotely"
    FLEXJOBS = "flexjobs"
    UPWORK = "upwork"
    WELLFOUND = "wellfound"
    DICE = "dice"
    MONSTER = "monster"
    OTHER = "other"


class ActivityType(str, Enum):
    """Kind of step recorded in the activity log."""
    SEARCH_STARTED = "search_started"
    JOB_FOUND = "job_found"
    JOB_ANALYZED = "job_analyzed"
    APPLICATION_STARTED = "application_started"
    COVER_LETTER_GENERATED = "cover_letter_generated"
    APPLICATION_SUBMITTED = "application_submitted"
    EMAIL_SENT = "email_sent"
    EMAIL_RECEIVED = "email_received"
    STATUS_UPDATE = "status_update"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    ERROR = "error"
    THINKING = "thinking"


class Agent(CamelModel):
    """Generated persona of the job-hunting agent."""
    id: str
    name: str
    first_name: str
    last_name: str
    email: str
    avatar: str
    skills: List[str]
    personality: str
    years_experience: int
    location: str = "Remote"
    status: AgentStatus = AgentStatus.IDLE
    created_at: datetime = Field(default_factory=utcnow)


class AgentState(CamelModel):
    """The single mutable status record of the agent."""
    status: AgentStatus = AgentStatus.IDLE
    last_active: datetime = Field(default_factory=utcnow)
    current_task: Optional[str] = None


class JobListing(CamelModel):
    """A discovered job posting. The URL is the natural dedup key."""
    id: str = Field(default_factory=lambda: new_id('job'))
    title: str
    company: str
    location: str = "Remote"
    salary: Optional[str] = None
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    platform: JobPlatform = JobPlatform.OTHER
    url: str
    posted_at: datetime = Field(default_factory=utcnow)
    discovered_at: datetime = Field(default_factory=utcnow)


class Application(CamelModel):
    """An application of the agent to a job listing."""
    id: str = Field(default_factory=lambda: new_id('app'))
    agent_id: str
    job_id: str
    job: JobListing
    status: ApplicationStatus = ApplicationStatus.APPLIED
    cover_letter: Optional[str] = None
    applied_at: datetime = Field(default_factory=utcnow)
    response_at: Optional[datetime] = None
    response_message: Optional[str] = None
    interview_date: Optional[datetime] = None
    notes: Optional[str] = None


class ActivityLog(CamelModel):
    """One append-only entry of the activity feed."""
    id: str = Field(default_factory=lambda: new_id('log'))
    agent_id: str
    type: ActivityType
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=utcnow)


class AgentStats(CamelModel):
    """Counts derived from the application collection on every read."""
    total_applications: int = 0
    pending: int = 0
    in_review: int = 0
    interviews: int = 0
    offers: int = 0
    rejections: int = 0
    no_response: int = 0
    success_rate: float = 0.0


class JobFitAnalysis(CamelModel):
    """Suitability of a job for the agent."""
    score: int = Field(ge=0, le=100)
    reasons: List[str] = Field(default_factory=list)
    should_apply: bool


class HuntResult(CamelModel):
    """Summary returned by one hunt cycle."""
    jobs_found: int = 0
    applications_submitted: int = 0
    logs: List[ActivityLog] = Field(default_factory=list)
    skipped: bool = False
