import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Map storage failures escaping a route to an explicit 503 response."""

    @app.exception_handler(PyMongoError)
    async def storage_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": "Database operation failed"},
        )
