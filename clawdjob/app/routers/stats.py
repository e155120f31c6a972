from fastapi import APIRouter, Depends

from clawdjob.core.identity import AGENT_ID
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import AgentStats
from clawdjob.core.storage import Storage
from clawdjob.features.job_search.tracker import calculate_stats

from ..dependencies import get_store

logger = setup_logging('api_stats')

router = APIRouter()


@router.get("")
async def get_stats(storage: Storage = Depends(get_store)):
    """Aggregate application counts; zeros if they cannot be computed"""
    try:
        return calculate_stats(storage, AGENT_ID).to_json_dict()
    except Exception as e:
        logger.error(f"Failed to fetch stats: {str(e)}")
        return AgentStats().to_json_dict()
