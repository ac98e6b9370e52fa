"""
Kanban - domain exceptions and application exception handlers
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger("exceptions")


class KanbanError(Exception):
    """Base exception for board operations"""
    def __init__(self, message: str, code: str = "KANBAN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class LastColumnError(KanbanError):
    """Raised when deleting the only remaining column"""
    def __init__(self, message: str = "Cannot delete the last column"):
        super().__init__(message, code="LAST_COLUMN")


class UnknownOrderTargetError(KanbanError):
    """A strict reorder batch referenced a row that does not exist"""
    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} {entity_id} not found", code="UNKNOWN_ORDER_TARGET")


def _format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        detail = _format_validation_error(exc)
        logger.warning("validation_error", path=request.url.path, detail=detail)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("database_error", path=request.url.path, error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
