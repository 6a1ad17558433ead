"""
Read-side projections of stored pulls for the HTTP API
"""

from typing import List, Optional, Union
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from models.pull import Pull
from models.train import Train
from schemas.api import PullResponse, TrainSummary, TrainDetail
from core.exceptions import BadRequestError, NotFoundError
import logging

logger = logging.getLogger(__name__)

# Ids are 64-bit signed integers in every supported backend
MAX_ID = 2**63 - 1


def check_id(resource: str, value: int) -> int:
    if not -MAX_ID - 1 <= value <= MAX_ID:
        raise BadRequestError(
            f"{resource.capitalize()} id out of range",
            context={"resource": resource, "resource_id": str(value)}
        )
    return value


class TrainStore:
    """Query pulls and trains. No business logic, only projections."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def list_pulls(self) -> List[PullResponse]:
        result = await self.db.execute(select(Pull).order_by(Pull.id))
        return [PullResponse.model_validate(p) for p in result.scalars().all()]

    async def get_pull(self, pull_id: int) -> PullResponse:
        check_id("pull", pull_id)
        pull = await self.db.get(Pull, pull_id)
        if pull is None:
            raise NotFoundError(
                f"Pull {pull_id} not found",
                context={"resource": "pull", "resource_id": pull_id}
            )
        return PullResponse.model_validate(pull)

    async def latest_pull(self) -> Optional[PullResponse]:
        result = await self.db.execute(select(Pull).order_by(Pull.id.desc()).limit(1))
        pull = result.scalar_one_or_none()
        return PullResponse.model_validate(pull) if pull else None

    async def list_trains(
        self, pull_id: int, include_station_times: bool = False
    ) -> List[Union[TrainSummary, TrainDetail]]:
        """
        Trains of one pull, ordered by name.

        Station times are only queried (one selectin load for all trains)
        when include_station_times is set; otherwise the returned summaries
        have no `times` field at all.
        """
        check_id("pull", pull_id)
        query = select(Train).where(Train.pull_id == pull_id).order_by(Train.name)

        if include_station_times:
            query = query.options(selectinload(Train.station_times))
            result = await self.db.execute(query)
            return [TrainDetail.from_row(t) for t in result.scalars().all()]

        result = await self.db.execute(query)
        return [TrainSummary.from_row(t) for t in result.scalars().all()]

    async def get_train(self, train_id: int) -> TrainDetail:
        check_id("train", train_id)
        result = await self.db.execute(
            select(Train)
            .where(Train.id == train_id)
            .options(selectinload(Train.station_times))
        )
        train = result.scalar_one_or_none()
        if train is None:
            raise NotFoundError(
                f"Train {train_id} not found",
                context={"resource": "train", "resource_id": train_id}
            )
        return TrainDetail.from_row(train)
