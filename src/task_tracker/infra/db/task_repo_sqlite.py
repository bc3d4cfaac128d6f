from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import Integer, String, Text, DateTime, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from task_tracker.domain.errors import NotFound, PersistenceError
from task_tracker.domain.task_models import Task, TaskCreate, TaskStatus, TaskUpdate
from task_tracker.infra.db.sqlite import fits_sqlite_integer

logger = logging.getLogger("task_tracker.db")


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back naive; they were written as UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def next_updated_at(previous: datetime) -> datetime:
    """Current time, nudged forward so updated_at strictly increases."""
    return max(utcnow(), as_utc(previous) + timedelta(microseconds=1))


class TaskRow(Base):
    __tablename__ = "tasks"
    # AUTOINCREMENT keeps sqlite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TaskStatus.open.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            status=TaskStatus(self.status),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )


class SQLiteTaskRepo:
    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    @staticmethod
    def _require_storable_id(task_id: int) -> None:
        # no row can carry an id sqlite is unable to store
        if not fits_sqlite_integer(task_id):
            raise NotFound(task_id)

    async def list_all(self) -> List[Task]:
        async with self.sessionmaker() as session:
            res = await session.execute(select(TaskRow).order_by(TaskRow.id))
            rows = res.scalars().all()
            return [r.to_domain() for r in rows]

    async def get_by_id(self, task_id: int) -> Task:
        self._require_storable_id(task_id)
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task_id)
            if row is None:
                raise NotFound(task_id)
            return row.to_domain()

    async def insert(self, data: TaskCreate) -> Task:
        now = utcnow()
        row = TaskRow(
            title=data.title,
            description=data.description,
            status=data.status.value,
            created_at=now,
            updated_at=now,
        )
        async with self.sessionmaker() as session:
            session.add(row)
            try:
                await session.commit()
            except SQLAlchemyError as err:
                await session.rollback()
                logger.exception("db.write_failed", extra={"category": "db", "event": "db.write_failed", "op": "insert"})
                raise PersistenceError("Failed to create task") from err
            return row.to_domain()

    async def update(self, task_id: int, data: TaskUpdate) -> Task:
        self._require_storable_id(task_id)
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task_id)
            if row is None:
                raise NotFound(task_id)

            for field, value in data.changes().items():
                if isinstance(value, TaskStatus):
                    value = value.value
                setattr(row, field, value)
            row.updated_at = next_updated_at(row.updated_at)

            try:
                await session.commit()
            except SQLAlchemyError as err:
                await session.rollback()
                logger.exception(
                    "db.write_failed",
                    extra={"category": "db", "event": "db.write_failed", "op": "update", "task_id": task_id},
                )
                raise PersistenceError("Failed to update task") from err
            return row.to_domain()

    async def delete_by_id(self, task_id: int) -> None:
        self._require_storable_id(task_id)
        async with self.sessionmaker() as session:
            res = await session.execute(delete(TaskRow).where(TaskRow.id == task_id))
            await session.commit()
            if res.rowcount == 0:
                raise NotFound(task_id)
