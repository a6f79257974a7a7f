"""
Custom exception classes for the importer.

Only ImportDirectoryNotFoundError is allowed to end a run. Everything else
is caught at the file, row, or field boundary and logged.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all importer errors.

    Attributes:
        code: Error code (e.g., "CSV_PARSE_ERROR")
        message: Human-readable message
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a log/report friendly dict."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Input could not be accepted."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(code=code, message=message, details=details)


class ExternalServiceError(AppError):
    """External service failure."""

    def __init__(
        self,
        service: str,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            details={"service": service, **(details or {})}
        )


# ===================
# RUN-LEVEL ERRORS
# ===================

class ImportDirectoryNotFoundError(AppError):
    """Source directory is missing; the whole run is aborted."""

    def __init__(self, path: str):
        super().__init__(
            code="CSV_DIR_NOT_FOUND",
            message=f"CSV directory not found: {path}",
            details={"path": path}
        )


# ===================
# FILE-LEVEL ERRORS
# ===================

class CSVParseError(ValidationError):
    """CSV file could not be read."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=message,
            details=details
        )


# ===================
# STRAPI ERRORS
# ===================

class StrapiRequestError(ExternalServiceError):
    """Strapi answered with a non-2xx status."""

    def __init__(
        self,
        method: str,
        path: str,
        status_code: int,
        response_body: Any = None
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(
            service="strapi",
            code="STRAPI_REQUEST_FAILED",
            message=f"{status_code} error on {method} {path}",
            details={
                "method": method,
                "path": path,
                "status_code": status_code,
            }
        )


class StrapiTransportError(ExternalServiceError):
    """Request never got an HTTP answer (connect, read, DNS...)."""

    def __init__(self, method: str, path: str, error: str):
        super().__init__(
            service="strapi",
            code="STRAPI_UNREACHABLE",
            message=f"{method} {path} failed: {error}",
            details={"method": method, "path": path}
        )


class StrapiResponseError(ExternalServiceError):
    """2xx answer whose body is not the expected envelope."""

    def __init__(self, path: str, error: str):
        super().__init__(
            service="strapi",
            code="STRAPI_BAD_RESPONSE",
            message=f"Unexpected response body from {path}: {error}",
            details={"path": path}
        )
