from fastapi import APIRouter, Depends, HTTPException, status

from clawdjob.core.identity import AGENT_ID
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import ActivityLog, ActivityType
from clawdjob.core.storage import Storage

from ..dependencies import get_store
from ..models.requests import JobSubmission

logger = setup_logging('api_submit_job')

router = APIRouter()


@router.post("")
async def submit_job(
    submission: JobSubmission,
    storage: Storage = Depends(get_store)
):
    """Record a job suggested by a visitor in the activity log"""
    if not submission.job_url or not submission.description:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing jobUrl or description"
        )

    try:
        storage.add_activity_log(ActivityLog(
            agent_id=AGENT_ID,
            type=ActivityType.JOB_FOUND,
            message=f"User submitted job: {submission.description[:50]}...",
            details={
                "jobUrl": submission.job_url,
                "description": submission.description,
                "source": "user_submission",
            },
        ))
        return {"success": True, "message": "Job submitted successfully"}
    except Exception as e:
        logger.error(f"Error submitting job: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit job"
        )
