from fastapi import APIRouter, Depends, HTTPException, Query, status

from clawdjob.core.identity import AGENT_ID
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import ActivityLog
from clawdjob.core.storage import Storage

from ..dependencies import get_store
from ..models.requests import ActivityCreate

logger = setup_logging('api_activity')

router = APIRouter()


@router.get("/activity")
async def get_activity_logs(
    limit: int = Query(50, description="Maximum number of entries"),
    storage: Storage = Depends(get_store)
):
    """Recent activity wrapped in an object, newest first"""
    try:
        logs = storage.get_activity_logs(limit)
        return {"logs": [log.to_json_dict() for log in logs]}
    except Exception as e:
        logger.error(f"Error getting activity logs: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get activity logs"
        )


@router.get("/activities")
async def list_activities(
    limit: int = Query(50, description="Maximum number of entries"),
    storage: Storage = Depends(get_store)
):
    """Recent activity as a bare array; failures yield an empty list"""
    try:
        return [log.to_json_dict() for log in storage.get_activity_logs(limit)]
    except Exception as e:
        logger.error(f"Failed to fetch activities: {str(e)}")
        return []


@router.post("/activities", status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity: ActivityCreate,
    storage: Storage = Depends(get_store)
):
    """Append one entry to the activity log"""
    try:
        log = ActivityLog(
            agent_id=activity.agent_id or AGENT_ID,
            type=activity.type,
            message=activity.message,
            details=activity.details,
        )
        storage.add_activity_log(log)
        return log.to_json_dict()
    except Exception as e:
        logger.error(f"Failed to create activity: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create activity"
        )
