from fastapi.responses import JSONResponse
from starlette.requests import Request

from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """Base application exception."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BillingError(AppException):
    """Billing provider could not fulfil a request."""

    status_code = 502


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException raised by a route as a JSON error."""
    logger.error(
        f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={"status": exc.status_code},
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
