# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
#
# Two hierarchies reach the client:
# - ProfilerAPIException: HTTP-level failures (upload checks)
# - AnalysisError (lib/errors.py): the engine rejected the document or options
# Both render as {"detail", "code", "suggestion", "details"}.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.errors import AnalysisError, InvalidConfigurationError

logger = logging.getLogger(__name__)


class ProfilerAPIException(Exception):
    """
    Base exception for the CSV Profiler API.

    All HTTP-level exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "PROFILER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return _error_body(self.message, self.code, self.suggestion, self.details)


def _error_body(
    message: str,
    code: str,
    suggestion: str | None,
    details: dict[str, Any],
) -> dict[str, Any]:
    result = {
        "detail": message,
        "code": code,
    }
    if suggestion:
        result["suggestion"] = suggestion
    if details:
        result["details"] = details
    return result


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(ProfilerAPIException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(ProfilerAPIException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def profiler_exception_handler(
    request: Request,
    exc: ProfilerAPIException
) -> JSONResponse:
    """
    Convert ProfilerAPIException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def analysis_exception_handler(
    request: Request,
    exc: AnalysisError
) -> JSONResponse:
    """
    Convert engine errors to JSON responses.

    Bad options are a 422; anything wrong with the document itself is a 400.
    """
    status_code = 422 if isinstance(exc, InvalidConfigurationError) else 400
    logger.info(f"Analysis rejected ({exc.code}): {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.message, exc.code, exc.suggestion, exc.details)
    )
