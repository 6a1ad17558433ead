"""
Single train endpoint
"""

from fastapi import APIRouter, Depends
from api.dependencies import get_store
from schemas.api import TrainDetail
from services.query_store import TrainStore

router = APIRouter(prefix="/api/trains", tags=["Trains"])


@router.get("/{train_id}", response_model=TrainDetail, response_model_by_alias=True)
async def get_train(train_id: int, store: TrainStore = Depends(get_store)):
    """One train with all of its station times in feed order"""
    return await store.get_train(train_id)
