import re

from fastapi import APIRouter, Depends, Request, Response
from task_tracker.domain.errors import InvalidInput
from task_tracker.domain.task_models import Task, TaskCreate, TaskUpdate
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

_INT_RE = re.compile(r"-?[0-9]+")


def get_service(request: Request) -> TaskService:
    # Set by create_app()
    return request.app.state.task_service


def parse_task_id(task_id: str) -> int:
    """Path ids must be plain integers: "1.5" and "abc" are rejected, "-1" is not."""
    if not _INT_RE.fullmatch(task_id):
        raise InvalidInput(
            "Validation failed (numeric string is expected)",
            errors=[{"loc": ["path", "task_id"], "msg": "value is not a valid integer", "type": "int_parsing"}],
        )
    return int(task_id)


@router.get("", response_model=list[Task])
async def list_tasks(svc: TaskService = Depends(get_service)):
    return await svc.list_tasks()


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int = Depends(parse_task_id), svc: TaskService = Depends(get_service)):
    return await svc.get_task(task_id)


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: TaskCreate, svc: TaskService = Depends(get_service)):
    return await svc.create_task(payload)


@router.put("/{task_id}", response_model=Task)
async def update_task(
    payload: TaskUpdate,
    task_id: int = Depends(parse_task_id),
    svc: TaskService = Depends(get_service),
):
    return await svc.update_task(task_id, payload)


@router.delete("/{task_id}", status_code=204, response_class=Response)
async def delete_task(task_id: int = Depends(parse_task_id), svc: TaskService = Depends(get_service)):
    await svc.delete_task(task_id)
    return Response(status_code=204)
