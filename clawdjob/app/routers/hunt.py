from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clawdjob.core.logging import setup_logging
from clawdjob.features.job_search.hunter import JobHunter

from ..dependencies import get_hunter

logger = setup_logging('api_hunt')

router = APIRouter()


@router.post("")
async def run_hunt(hunter: JobHunter = Depends(get_hunter)):
    """Run one hunt cycle and report what it did"""
    try:
        result = await hunter.run_cycle()
        return {"success": True, **result.to_json_dict()}
    except Exception as e:
        logger.error(f"Error running job hunt: {str(e)}")
        return JSONResponse(
            {"error": "Job hunting cycle failed", "details": str(e)},
            status_code=500
        )
