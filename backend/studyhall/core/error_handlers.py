"""
Exception handlers that turn application errors into JSON responses.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from studyhall.core.exceptions import BaseAppException
from studyhall.core.logging import get_logger

logger = get_logger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "app_exception",
        error_code=exc.error_code,
        status_code=exc.status_code,
        message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
            "path": request.url.path,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
