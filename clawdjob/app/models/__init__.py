"""FastAPI request models."""

from .requests import ActivityCreate, ApplicationStatusUpdate, JobSubmission

__all__ = [
    'ActivityCreate',
    'ApplicationStatusUpdate',
    'JobSubmission',
]
