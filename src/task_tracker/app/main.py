from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI

from task_tracker.app.errors import install_error_handlers
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.app.routes import tasks
from task_tracker.config import Settings, get_settings
from task_tracker.infra.db.sqlite import create_schema, open_task_db
from task_tracker.infra.db.task_repo_sqlite import Base, SQLiteTaskRepo
from task_tracker.observability.logging import setup_logging
from task_tracker.services.task_service import TaskService

logger = logging.getLogger("task_tracker.system")


def create_app(settings: Optional[Settings] = None, repo=None) -> FastAPI:
    """
    Build the API. Pass ``repo`` to run against an already constructed store
    (e.g. InMemoryTaskRepo); otherwise a SQLite store at ``settings.db_path``
    is wired up and its table created on startup.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info("system.start", extra={"category": "system", "event": "system.start"})

    engine = None
    if repo is None:
        engine, sessionmaker = open_task_db(settings.db_path)
        repo = SQLiteTaskRepo(sessionmaker)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            await create_schema(engine, Base)
        yield
        if engine is not None:
            await engine.dispose()
        logger.info("system.stop", extra={"category": "system", "event": "system.stop"})

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.task_service = TaskService(repo)

    app.add_middleware(AccessLogMiddleware)
    install_error_handlers(app)
    app.include_router(tasks.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
