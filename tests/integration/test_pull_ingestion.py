"""
Integration tests: pulls written through the loader into a real SQLite database
"""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import delete, func, select
from ingestion.loaders.pull_loader import PullLoader
from models.pull import Pull
from models.train import Train
from models.station_time import StationTime

PULLED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
SENTINEL = "&mdash;"


async def count(db_session, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar()


async def station_times_by_code(db_session) -> dict:
    result = await db_session.execute(select(StationTime))
    return {st.code: st for st in result.scalars().all()}


@pytest.mark.asyncio
async def test_ingest_pull_writes_all_rows(loader, db_session, raw_trains):
    pull_id = await loader.ingest_pull(raw_trains)

    pull = await db_session.get(Pull, pull_id)
    assert pull is not None
    assert pull.pulled_at == PULLED_AT
    assert await count(db_session, Train) == 2
    assert await count(db_session, StationTime) == 2


@pytest.mark.asyncio
async def test_train_scalars_stored_verbatim(loader, db_session, raw_trains):
    pull_id = await loader.ingest_pull(raw_trains)

    result = await db_session.execute(
        select(Train).where(Train.pull_id == pull_id, Train.name == "T1")
    )
    train = result.scalar_one()
    assert train.latitude == 45.5
    assert train.longitude == -73.6
    assert train.departed is True
    assert train.from_station == "MTRL"
    assert train.to_station == "TRTO"
    assert train.poll_min == 2

    result = await db_session.execute(select(Train).where(Train.name == "T2"))
    empty_train = result.scalar_one()
    assert empty_train.latitude is None
    assert empty_train.poll is None


@pytest.mark.asyncio
async def test_sentinels_resolved_on_storage(loader, db_session, raw_trains):
    await loader.ingest_pull(raw_trains)

    rows = await station_times_by_code(db_session)

    montreal = rows["MTRL"]
    assert montreal.estimated is None
    assert montreal.eta is None
    assert montreal.scheduled == "2024-01-01T09:30"
    assert montreal.departure_estimated == "2024-01-01T09:32"
    assert montreal.departure_scheduled == "2024-01-01T09:30"
    assert montreal.arrival_estimated is None
    assert montreal.arrival_scheduled is None

    dorval = rows["DORV"]
    assert dorval.arrival_estimated is None
    assert dorval.arrival_scheduled == "2024-01-01T00:00"
    assert dorval.eta == "10:00"


@pytest.mark.asyncio
async def test_top_level_scheduled_sentinel_stored_literally(loader, db_session, raw_trains):
    await loader.ingest_pull(raw_trains)

    rows = await station_times_by_code(db_session)

    assert rows["DORV"].scheduled == SENTINEL


@pytest.mark.asyncio
async def test_station_time_ids_follow_feed_order(loader, db_session, raw_trains):
    await loader.ingest_pull(raw_trains)

    result = await db_session.execute(select(StationTime).order_by(StationTime.id))
    assert [st.code for st in result.scalars().all()] == ["MTRL", "DORV"]


@pytest.mark.asyncio
async def test_empty_feed_records_empty_pull(loader, db_session):
    pull_id = await loader.ingest_pull({})

    assert await db_session.get(Pull, pull_id) is not None
    assert await count(db_session, Train) == 0


@pytest.mark.asyncio
async def test_pull_ids_are_monotonic(loader, raw_trains):
    first = await loader.ingest_pull(raw_trains)
    second = await loader.ingest_pull(raw_trains)
    third = await loader.ingest_pull({})

    assert first < second < third


@pytest.mark.asyncio
async def test_same_train_name_in_later_pull_is_new_row(loader, db_session, raw_trains):
    await loader.ingest_pull(raw_trains)
    await loader.ingest_pull(raw_trains)

    result = await db_session.execute(select(Train).where(Train.name == "T1"))
    assert len({t.pull_id for t in result.scalars().all()}) == 2


@pytest.mark.asyncio
async def test_deleting_pull_cascades(loader, session_maker, raw_trains):
    kept = await loader.ingest_pull(raw_trains)
    removed = await loader.ingest_pull(raw_trains)

    async with session_maker() as session:
        async with session.begin():
            await session.execute(delete(Pull).where(Pull.id == removed))

    async with session_maker() as session:
        result = await session.execute(select(Train.pull_id).distinct())
        assert result.scalars().all() == [kept]
        assert await count(session, StationTime) == 2


@pytest.mark.asyncio
async def test_pulled_at_reads_back_as_utc(session_maker, db_session):
    eastern = timezone(timedelta(hours=-5))
    loader = PullLoader(session_maker, clock=lambda: datetime(2024, 1, 1, 7, 0, tzinfo=eastern))

    pull_id = await loader.ingest_pull({})

    pull = await db_session.get(Pull, pull_id)
    assert pull.pulled_at == PULLED_AT
    assert pull.pulled_at.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_empty_train_name_is_stored(loader, db_session, raw_trains):
    records = {"": raw_trains["T2"], "T1": raw_trains["T1"]}

    pull_id = await loader.ingest_pull(records)

    result = await db_session.execute(
        select(Train.name).where(Train.pull_id == pull_id).order_by(Train.name)
    )
    assert result.scalars().all() == ["", "T1"]
