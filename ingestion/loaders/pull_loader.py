"""
Write one feed pull (pull, trains, station times) as a single transaction
"""

from datetime import datetime, timezone
from typing import Callable, Mapping, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from ingestion.transformers.normalizer import TrainNormalizer
from models.pull import Pull
from models.train import Train
from models.station_time import StationTime
from schemas.feed import RawTrain
from schemas.normalized import TrainCreate
from core.exceptions import IngestError
import logging

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PullLoader:
    """
    Insert a pull and everything observed in it, all or nothing.

    Ensures:
    - Rows are created in nesting order: pull, then each train, then its times
    - Nothing from a failed pull is left behind (one transaction, rolled back)
    - The failing stage is reported on the raised IngestError

    Attributes:
        session_maker: Factory for the session that owns the unit of work
        clock: Source of the pull timestamp (injected for tests)
    """

    def __init__(
        self,
        session_maker: async_sessionmaker,
        clock: Callable[[], datetime] = utcnow,
        normalizer: Optional[TrainNormalizer] = None
    ):
        self.session_maker = session_maker
        self.clock = clock
        self.normalizer = normalizer or TrainNormalizer()

    async def ingest_pull(self, raw_records: Mapping[str, RawTrain]) -> int:
        """
        Normalize and store one feed pull.

        Args:
            raw_records: Train name -> raw record, in any order

        Returns:
            ID of the new pull

        Raises:
            IngestError: Any insert or the commit failed; nothing was stored
        """
        station_time_count = 0

        logger.info(f"Beginning transaction for {len(raw_records)} trains")

        async with self.session_maker() as session:
            try:
                async with session.begin():
                    pull_id = await self._insert_pull(session)

                    for name, raw_train in raw_records.items():
                        train, train_id = await self._insert_train(
                            session, pull_id, name, raw_train
                        )
                        station_time_count += await self._insert_station_times(
                            session, pull_id, train_id, train
                        )

                    logger.info("Committing pull data")
            except IngestError:
                raise
            except Exception as e:
                raise IngestError(
                    "Failed to commit pull",
                    stage="commit",
                    original_exception=e
                )

        logger.info(
            f"Stored pull {pull_id}: {len(raw_records)} trains, "
            f"{station_time_count} station times"
        )
        return pull_id

    async def _insert_pull(self, session: AsyncSession) -> int:
        pull = Pull(pulled_at=self.clock())
        try:
            session.add(pull)
            await session.flush()
        except Exception as e:
            raise IngestError(
                "Failed to insert pull",
                stage="pull",
                context={"operation": "INSERT", "table_name": "pulls"},
                original_exception=e
            )
        return pull.id

    async def _insert_train(
        self, session: AsyncSession, pull_id: int, name: str, raw_train: RawTrain
    ) -> Tuple[TrainCreate, int]:
        try:
            train = self.normalizer.normalize(name, raw_train)
            row = Train(pull_id=pull_id, **train.model_dump(exclude={"times"}))
            session.add(row)
            await session.flush()
        except Exception as e:
            raise IngestError(
                f"Failed to insert train {name}",
                stage="train",
                context={
                    "operation": "INSERT",
                    "table_name": "trains",
                    "pull_id": pull_id,
                    "train_name": name
                },
                original_exception=e
            )
        return train, row.id

    async def _insert_station_times(
        self, session: AsyncSession, pull_id: int, train_id: int, train: TrainCreate
    ) -> int:
        if not train.times:
            return 0

        # Added in feed order so ids follow it
        rows = [StationTime(train_id=train_id, **st.model_dump()) for st in train.times]
        try:
            session.add_all(rows)
            await session.flush()
        except Exception as e:
            raise IngestError(
                f"Failed to insert station times for train {train.name}",
                stage="station_time",
                context={
                    "operation": "INSERT",
                    "table_name": "station_times",
                    "pull_id": pull_id,
                    "train_name": train.name
                },
                original_exception=e
            )
        return len(rows)
