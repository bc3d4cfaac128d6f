import uvicorn

from task_tracker.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "task_tracker.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,  # create_app() installs the JSON handlers
    )


if __name__ == "__main__":
    main()
