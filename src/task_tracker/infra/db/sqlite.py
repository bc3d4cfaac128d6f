from __future__ import annotations
import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger("task_tracker.db")

# SQLite INTEGER is a signed 64-bit value; larger Python ints can't be bound
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def fits_sqlite_integer(value: int) -> bool:
    return SQLITE_INT_MIN <= value <= SQLITE_INT_MAX


def open_task_db(db_path: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Engine and session factory for the task database file, creating its directory."""
    p = Path(db_path).resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(f"sqlite+aiosqlite:///{p.as_posix()}")
    return engine, async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine, base: type[DeclarativeBase]) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)
    logger.info("db.ready", extra={"category": "db", "event": "db.ready", "url": str(engine.url)})
