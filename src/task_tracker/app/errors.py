from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from task_tracker.domain.errors import NotFound, PersistenceError, TaskError, InvalidInput

logger = logging.getLogger("task_tracker.system")

_STATUS_BY_KIND: dict[type[Exception], int] = {
    InvalidInput: 400,
    RequestValidationError: 400,
    NotFound: 404,
    PersistenceError: 500,
}


def status_for(exc: Exception) -> int:
    for kind, status in _STATUS_BY_KIND.items():
        if isinstance(exc, kind):
            return status
    return 500


def _error_items(raw: list) -> list[dict]:
    # pydantic may put exception objects in "ctx"; keep the serialisable parts only
    return [
        {"loc": list(e.get("loc", ())), "msg": str(e.get("msg", "")), "type": str(e.get("type", ""))}
        for e in raw
    ]


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _error_items(exc.errors())
    logger.info(
        "request.invalid",
        extra={"category": "http", "event": "request.invalid", "path": request.url.path, "errors": errors},
    )
    return JSONResponse(status_code=status_for(exc), content={"detail": "Validation failed", "errors": errors})


async def _handle_task_error(request: Request, exc: TaskError) -> JSONResponse:
    status = status_for(exc)
    content: dict = {"detail": str(exc)}
    if isinstance(exc, InvalidInput):
        content["errors"] = _error_items(exc.errors)
    return JSONResponse(status_code=status, content=content)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(TaskError, _handle_task_error)
