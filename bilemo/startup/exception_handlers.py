"""
Exception handlers for the BileMo API.

Validation failures are answered with a bare JSON array of messages; every
other error with {"detail": message}.  CORS headers are added to error
responses for allowed origins.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bilemo.i18n import _
from bilemo.services.pagination_service import PageNotFoundError
from bilemo.services.validator_service import ValidationFailedError, validator_service
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.startup.exceptions")


def register_exception_handlers(app: FastAPI, origins: list):
    """
    Register exception handlers for the FastAPI application.

    Args:
        app: The FastAPI application instance
        origins: List of allowed CORS origins
    """

    def with_cors(request: Request, response: JSONResponse) -> JSONResponse:
        request_origin = request.headers.get("origin")
        if request_origin and request_origin in origins:
            response.headers["Access-Control-Allow-Origin"] = request_origin
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Expose-Headers"] = "Authorization, Location"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions raised by the endpoints and dependencies."""
        logger.warning(
            "HTTP Exception occurred - Status: %s, Detail: %s, Path: %s",
            exc.status_code,
            exc.detail,
            request.url.path,
        )
        response = JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )
        return with_cors(request, response)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Turn pydantic request errors into the list of violation messages."""
        messages = validator_service.format_errors(exc.errors())
        logger.info(
            "Request rejected - Path: %s, Violations: %s", request.url.path, messages
        )
        response = JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=messages)
        return with_cors(request, response)

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        """Entity rejected by the validator service."""
        logger.info(
            "Entity rejected - Path: %s, Violations: %s", request.url.path, exc.messages
        )
        response = JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=exc.messages
        )
        return with_cors(request, response)

    @app.exception_handler(PageNotFoundError)
    async def page_not_found_handler(request: Request, exc: PageNotFoundError):
        """Requested list page is past the last one."""
        logger.info("Page not found - Path: %s, %s", request.url.path, exc)
        response = JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )
        return with_cors(request, response)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle any unhandled exceptions."""
        logger.error(
            "Unhandled Exception occurred - Path: %s, Exception: %s",
            request.url.path,
            exc,
            exc_info=True,
        )
        logger.error("Exception type: %s", type(exc).__name__)
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": _("An unexpected error occurred")},
        )
        return with_cors(request, response)

    logger.info("Exception handlers registered")
