import logging
from typing import List
from task_tracker.domain.task_models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger("task_tracker.tasks")

class TaskService:
    def __init__(self, repo):
        self.repo = repo

    async def create_task(self, data: TaskCreate) -> Task:
        task = await self.repo.insert(data)
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title},
        )
        return task

    async def get_task(self, task_id: int) -> Task:
        return await self.repo.get_by_id(task_id)

    async def list_tasks(self) -> List[Task]:
        return await self.repo.list_all()

    async def update_task(self, task_id: int, data: TaskUpdate) -> Task:
        task = await self.repo.update(task_id, data)
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id, "fields": sorted(data.changes())},
        )
        return task

    async def delete_task(self, task_id: int) -> None:
        await self.repo.delete_by_id(task_id)
        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})
