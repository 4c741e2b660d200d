import asyncio
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from api.backend import BackendAPI
from api.dependencies import get_backend
from prioritizer.errors import PlannerError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/prioritize")
async def prioritize(backend: BackendAPI = Depends(get_backend)) -> dict:
    """Run one prioritization pass and return the ordered task list."""
    try:
        tasks = await asyncio.to_thread(backend.run)
    except (PlannerError, httpx.HTTPError) as e:
        logger.error(f"Prioritization failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    return {
        "tasks": [t.model_dump(mode="json") for t in tasks],
        "count": len(tasks),
    }
