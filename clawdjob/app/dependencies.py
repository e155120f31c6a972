"""Shared FastAPI dependencies."""
from fastapi import Depends

from clawdjob.core.config import get_settings
from clawdjob.core.identity import generate_agent_identity
from clawdjob.core.schemas import Agent
from clawdjob.core.storage import Storage, get_storage
from clawdjob.features.job_search.hunter import JobHunter, get_job_hunter


def get_store() -> Storage:
    """Storage backend selected at startup."""
    return get_storage()


def get_agent() -> Agent:
    """The agent persona of this deployment."""
    settings = get_settings()
    return generate_agent_identity(settings.agent_seed, email=settings.email_address)


def get_hunter(storage: Storage = Depends(get_store)) -> JobHunter:
    """Hunter bound to the request's storage backend."""
    return get_job_hunter(storage)
