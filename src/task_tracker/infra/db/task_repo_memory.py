from __future__ import annotations
from itertools import count
from typing import Dict, List

from task_tracker.domain.errors import NotFound
from task_tracker.domain.task_models import Task, TaskCreate, TaskUpdate
from task_tracker.infra.db.task_repo_sqlite import next_updated_at, utcnow

class InMemoryTaskRepo:
    """
    Process-local store with the same contract as SQLiteTaskRepo.
    Handy for tests and for running the API without a database file.
    """
    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._ids = count(1)

    async def list_all(self) -> List[Task]:
        return [self._tasks[k] for k in sorted(self._tasks)]

    async def get_by_id(self, task_id: int) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise NotFound(task_id) from None

    async def insert(self, data: TaskCreate) -> Task:
        now = utcnow()
        task = Task(
            id=next(self._ids),
            title=data.title,
            description=data.description,
            status=data.status,
            created_at=now,
            updated_at=now,
        )
        self._tasks[task.id] = task
        return task

    async def update(self, task_id: int, data: TaskUpdate) -> Task:
        current = await self.get_by_id(task_id)
        updated = current.model_copy(
            update={**data.changes(), "updated_at": next_updated_at(current.updated_at)}
        )
        self._tasks[task_id] = updated
        return updated

    async def delete_by_id(self, task_id: int) -> None:
        if self._tasks.pop(task_id, None) is None:
            raise NotFound(task_id)
