"""Run the board server: ``python -m kanban``."""
import uvicorn

from kanban.config import settings
from kanban.logging_config import configure_logging


def main() -> None:
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    uvicorn.run(
        "kanban.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
