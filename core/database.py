"""
Database engine, session management and schema bootstrap with SQLAlchemy async
"""

from typing import Optional
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.pool import NullPool
from core.config import settings
from models import Base, SchemaVersion, SCHEMA_VERSION
import logging

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, enabling foreign keys on SQLite"""
    engine = create_async_engine(
        database_url,
        echo=echo,
        poolclass=NullPool,
        future=True
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


engine = build_engine(settings.DATABASE_URL)
async_session_maker = build_session_maker(engine)


async def init_db(db_engine: Optional[AsyncEngine] = None) -> None:
    """
    Create all tables and record the schema version.
    
    Safe to run repeatedly: existing tables are left alone and the
    version row is only inserted once.
    """
    db_engine = db_engine or engine
    
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    async with build_session_maker(db_engine)() as session:
        async with session.begin():
            result = await session.execute(select(SchemaVersion.version))
            if result.first() is None:
                session.add(SchemaVersion(version=SCHEMA_VERSION))
                logger.info(f"Recorded schema version {SCHEMA_VERSION}")