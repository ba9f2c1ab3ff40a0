"""
Exception handlers.

Every ``AppException`` is rendered as ``{"detail": ..., "category": ...}`` so
the register can tell retryable infrastructure failures from data errors.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.utils.exceptions import AppException


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "category": exc.category},
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
