"""Error handling middleware and exception handlers."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from hls_ingest.commons.telemetry.logger import get_logger
from hls_ingest.domain.exceptions import (
    AllRenditionsFailedException,
    AssetNotFoundException,
    DomainException,
    EmptyUploadException,
    InvalidAssetIdException,
    OrchestrationException,
    PersistException,
    UnsupportedMediaTypeException,
    UploadTooLargeException,
)

logger = get_logger(__name__)


def _build_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build standardized error response.

    Args:
        request: HTTP request.
        code: Error code.
        message: Error message.
        status_code: HTTP status code.
        details: Additional details.

    Returns:
        JSON error response.
    """
    request_id = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
    )


def _handle_exception(  # noqa: PLR0911
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle exception and return appropriate error response.

    Args:
        request: HTTP request.
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, InvalidAssetIdException):
        logger.warning(f"Invalid asset id: {exc}")
        return _build_error_response(
            request=request,
            code="INVALID_ASSET_ID",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, AssetNotFoundException):
        logger.warning(f"Asset not found: {exc}")
        return _build_error_response(
            request=request,
            code="ASSET_NOT_FOUND",
            message=str(exc),
            status_code=status.HTTP_404_NOT_FOUND,
            details={"asset_id": exc.asset_id},
        )

    if isinstance(exc, EmptyUploadException):
        logger.warning(f"Empty upload: {exc}")
        return _build_error_response(
            request=request,
            code="VALIDATION_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, UploadTooLargeException):
        logger.warning(f"Upload too large: {exc}")
        return _build_error_response(
            request=request,
            code="UPLOAD_TOO_LARGE",
            message=str(exc),
            status_code=413,
            details={"limit_bytes": exc.limit_bytes},
        )

    if isinstance(exc, UnsupportedMediaTypeException):
        logger.warning(f"Unsupported media type: {exc}")
        return _build_error_response(
            request=request,
            code="UNSUPPORTED_MEDIA_TYPE",
            message=str(exc),
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            details={"content_type": exc.content_type, "allowed": exc.allowed},
        )

    if isinstance(exc, OrchestrationException):
        logger.error(f"Rendition batch failed: {exc}")
        details: dict[str, Any] = {"asset_id": exc.asset_id}
        if isinstance(exc, AllRenditionsFailedException):
            details["failed_profiles"] = exc.failed_profiles
        return _build_error_response(
            request=request,
            code="RENDITIONS_FAILED",
            message=str(exc),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )

    if isinstance(exc, PersistException):
        logger.error(f"Persist error: {exc}")
        return _build_error_response(
            request=request,
            code="PERSIST_ERROR",
            message=str(exc),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"asset_id": exc.asset_id},
        )

    if isinstance(exc, DomainException):
        logger.warning(f"Domain error: {exc}")
        return _build_error_response(
            request=request,
            code="DOMAIN_ERROR",
            message=str(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Catch-all for unexpected errors
    logger.exception(f"Unexpected error: {exc}")
    return _build_error_response(
        request=request,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(request, exc)
