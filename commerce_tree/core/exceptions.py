"""
Application Exception Handling

Single AppException class for all API errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Resource not found", "RESOURCE_NOT_FOUND", 404)
        raise AppException("Invalid path", "INVALID_PATH", 400, {"path": "x"})

    Error Codes:
        Catalog:
            - RESOURCE_NOT_FOUND (404)
            - CATEGORY_NOT_FOUND (404)
            - INVALID_PATH (400)

        General:
            - VALIDATION_ERROR (422)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "RESOURCE_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def resource_not_found(path: str) -> AppException:
    """Create virtual resource not found exception."""
    return AppException(
        f"No catalog resource at '{path}'",
        "RESOURCE_NOT_FOUND",
        404,
        {"path": path}
    )


def category_not_found(category_id: int) -> AppException:
    """Create category not found exception."""
    return AppException(
        f"Category {category_id} is not in the catalog",
        "CATEGORY_NOT_FOUND",
        404,
        {"category_id": category_id}
    )


def invalid_path(path: str, reason: str) -> AppException:
    """Create invalid path exception."""
    return AppException(
        f"Invalid catalog path: {reason}",
        "INVALID_PATH",
        400,
        {"path": path, "reason": reason}
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
