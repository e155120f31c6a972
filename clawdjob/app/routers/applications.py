from fastapi import APIRouter, Depends, HTTPException, status

from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import ApplicationStatus
from clawdjob.core.storage import Storage

from ..dependencies import get_store
from ..models.requests import ApplicationStatusUpdate

logger = setup_logging('api_applications')

router = APIRouter()


@router.get("")
async def get_applications(storage: Storage = Depends(get_store)):
    """List applications, most recent first"""
    try:
        applications = sorted(
            storage.get_applications(),
            key=lambda app: app.applied_at,
            reverse=True
        )
        return {"applications": [app.to_json_dict() for app in applications]}
    except Exception as e:
        logger.error(f"Error getting applications: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get applications"
        )


@router.patch("")
async def update_application(
    update: ApplicationStatusUpdate,
    storage: Storage = Depends(get_store)
):
    """Move one application to a new status"""
    if not update.application_id or not update.status:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing applicationId or status"
        )

    if update.status not in {s.value for s in ApplicationStatus}:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status: {update.status}"
        )

    try:
        updated = storage.update_application_status(
            update.application_id,
            update.status,
            update.response_message
        )
    except Exception as e:
        logger.error(f"Error updating application: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update application"
        )

    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )

    return {"application": updated.to_json_dict()}
