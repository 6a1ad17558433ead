"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import build_engine, build_session_maker, init_db
from ingestion.extractors.feed_extractor import decode_feed
from ingestion.loaders.pull_loader import PullLoader

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
SENTINEL = "&mdash;"


class SteppingClock:
    """Deterministic clock: each call returns the next tick"""

    def __init__(self, start: datetime = FIXED_NOW, step: timedelta = timedelta(hours=2)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Fresh SQLite database per test, schema created"""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'viarail_test.db'}")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_maker(test_engine):
    return build_session_maker(test_engine)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session for assertions against the test database"""
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    return SteppingClock()


@pytest_asyncio.fixture(scope="function")
async def loader(session_maker, clock):
    return PullLoader(session_maker, clock=clock)


@pytest.fixture
def feed_payload():
    """Feed object as served by the live endpoint (keys deliberately unsorted)"""
    return {
        "T2": {
            "lat": None,
            "lng": None,
            "speed": None,
            "direction": None,
            "poll": None,
            "departed": False,
            "arrived": False,
            "from": "OTTW",
            "to": "MTRL",
            "instance": "2024-01-01",
            "pollMin": None,
            "times": []
        },
        "T1": {
            "lat": 45.5,
            "lng": -73.6,
            "speed": 88.5,
            "direction": 270.0,
            "poll": "2024-01-01T11:58:00Z",
            "departed": True,
            "arrived": False,
            "from": "MTRL",
            "to": "TRTO",
            "instance": "2024-01-01",
            "pollMin": 2,
            "times": [
                {
                    "station": "Montréal",
                    "code": "MTRL",
                    "estimated": SENTINEL,
                    "scheduled": "2024-01-01T09:30",
                    "eta": SENTINEL,
                    "departure": {
                        "estimated": "2024-01-01T09:32",
                        "scheduled": "2024-01-01T09:30"
                    },
                    "diff": "late",
                    "diffMin": 2
                },
                {
                    "station": "Dorval",
                    "code": "DORV",
                    "estimated": "2024-01-01T09:55",
                    "scheduled": SENTINEL,
                    "eta": "10:00",
                    "arrival": {
                        "estimated": SENTINEL,
                        "scheduled": "2024-01-01T00:00"
                    },
                    "diff": "goo",
                    "diffMin": 0
                }
            ]
        }
    }


@pytest.fixture
def raw_trains(feed_payload):
    return decode_feed(feed_payload)
