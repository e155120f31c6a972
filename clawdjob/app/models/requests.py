"""Request bodies of the mutation endpoints.

Fields are optional so that missing values reach the handler and get a
400 with a message instead of FastAPI's 422.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelRequest(BaseModel):
    """Request model accepting camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicationStatusUpdate(CamelRequest):
    """Body of PATCH /api/applications."""
    application_id: Optional[str] = None
    status: Optional[str] = None
    response_message: Optional[str] = None


class ActivityCreate(CamelRequest):
    """Body of POST /api/activities."""
    agent_id: Optional[str] = None
    type: Optional[str] = None
    message: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class JobSubmission(CamelRequest):
    """Body of POST /api/submit-job."""
    job_url: Optional[str] = None
    description: Optional[str] = None
