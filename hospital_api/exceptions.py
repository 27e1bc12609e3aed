import logging
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    """Base for every error the application raises on purpose.

    ``error`` is the short category shown to clients, ``detail`` the
    human readable message.
    """

    status_code_default = 500
    error = "Internal server error"

    def __init__(self, detail: Optional[str] = None, status_code: Optional[int] = None,
                 details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(status_code=status_code or self.status_code_default, detail=detail or self.error)
        self.details = details


class ValidationError(APIException):
    status_code_default = 400
    error = "Validation failed"


class InvalidIdentifier(APIException):
    status_code_default = 400
    error = "Invalid identifier"


class NotFound(APIException):
    status_code_default = 404
    error = "Not found"


class DuplicateEmail(APIException):
    status_code_default = 409
    error = "Email already exists"


class SchedulingConflict(APIException):
    status_code_default = 409
    error = "Time conflict"


class StoreFailure(APIException):
    status_code_default = 500
    error = "Database error"

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        # the cause stays in the logs, clients only see the generic message
        super().__init__(detail=f"Failed to {operation}")
        self.operation = operation
        self.cause = cause


def create_error_response(error: str, message: Optional[str] = None,
                          details: Optional[List[Dict[str, Any]]] = None) -> dict:
    """Create a standardized error response"""
    body: Dict[str, Any] = {"success": False, "error": error}
    if message and message != error:
        body["message"] = message
    if details:
        body["details"] = details
    return body


def create_success_response(data: Any, message: Optional[str] = None, **extra: Any) -> dict:
    """Create a standardized success response"""
    body: Dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    body.update(extra)
    return body


def _clean_errors(errors) -> List[Dict[str, Any]]:
    cleaned = []
    for err in errors:
        cleaned.append({
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return cleaned


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    if isinstance(exc, StoreFailure):
        logger.error(
            f"Store failure during '{exc.operation}' on {request.method} {request.url.path}: {exc.cause!r}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.error, exc.detail, exc.details),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for plain HTTPException (404 routes, 405 ...)"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=create_error_response(ValidationError.error, details=_clean_errors(exc.errors())),
    )


def validation_error_from_pydantic(exc) -> ValidationError:
    """Translate a pydantic ValidationError raised outside the request cycle."""
    return ValidationError(details=_clean_errors(exc.errors()))
