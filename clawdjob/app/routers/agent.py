from fastapi import APIRouter, Depends, HTTPException, status

from clawdjob.core.identity import generate_resume
from clawdjob.core.logging import setup_logging
from clawdjob.core.schemas import Agent
from clawdjob.core.storage import Storage
from clawdjob.features.job_search.tracker import calculate_stats, get_agent_thoughts

from ..dependencies import get_agent, get_store

logger = setup_logging('api_agent')

router = APIRouter()


@router.get("")
async def get_agent_info(
    agent: Agent = Depends(get_agent),
    storage: Storage = Depends(get_store)
):
    """Get the agent identity with its live state, stats and thoughts"""
    try:
        state = storage.get_agent_state()
        agent_data = agent.to_json_dict()
        agent_data.update(
            status=state.status.value,
            currentTask=state.current_task,
            lastActive=state.last_active.isoformat(),
        )
        return {
            "agent": agent_data,
            "stats": calculate_stats(storage, agent.id).to_json_dict(),
            "thoughts": get_agent_thoughts(storage),
            "resume": generate_resume(agent),
        }
    except Exception as e:
        logger.error(f"Error getting agent: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get agent info"
        )
