"""
Pull listing and per-pull train endpoints
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from api.dependencies import get_store
from schemas.api import PullResponse
from services.query_store import TrainStore
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pulls", tags=["Pulls"])


@router.get("/", response_model=List[PullResponse])
async def list_pulls(store: TrainStore = Depends(get_store)):
    """All recorded pulls, oldest first"""
    return await store.list_pulls()


@router.get("/{pull_id}", response_model=None)
async def list_pull_trains(
    request: Request,
    pull_id: int,
    full: Optional[str] = Query(None, description="Any non-empty value includes station times"),
    store: TrainStore = Depends(get_store)
):
    """
    Trains observed in one pull, ordered by name.

    Without `full` the train objects carry no `times` key at all.
    """
    include_times = bool(full)
    request_id = getattr(request.state, "request_id", None)

    await store.get_pull(pull_id)
    trains = await store.list_trains(pull_id, include_station_times=include_times)

    logger.info(f"[{request_id}] GET /api/pulls/{pull_id} full={include_times}: {len(trains)} trains")
    return [t.model_dump(by_alias=True) for t in trains]
