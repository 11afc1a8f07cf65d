import logging

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from app.core.exceptions import (
    ProductNotFoundError,
    ProductStoreError,
    RestockError,
    StockPilotError,
    StorageConfigError,
    StorageError,
)

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins
STATUS_BY_ERROR = [
    (ProductNotFoundError, 404),
    (RestockError, 400),
    (StorageConfigError, 503),
    (StorageError, 502),
    (ProductStoreError, 500),
]


def status_for(exc: Exception) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _error_response(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "detail": str(exc)
        }
    )


async def stockpilot_error_handler(request: Request, exc: StockPilotError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path} ({status_code}): {exc}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path} ({status_code}): {exc}")
    return _error_response(exc, status_code)


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"{type(exc).__name__} on {request.url.path} (500): {exc}", exc_info=True)
            return _error_response(exc, 500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StockPilotError, stockpilot_error_handler)
    app.add_middleware(CatchAllExceptionMiddleware)
