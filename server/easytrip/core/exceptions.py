"""Error taxonomy and the handlers that turn every failure into a response envelope."""

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class EasyTripError(HTTPException):
    """
    Base exception for every outcome the API reports as a failure.

    Carries the HTTP status code, a caller-facing message and an optional
    list of field-level errors. Subclasses with ``expose = False`` keep their
    message for the operator log and show callers a generic one instead.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_ERROR_MESSAGE
    expose: bool = True

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(
            status_code=self.status_code,
            detail=self.message,
            headers=headers,
        )

    def to_envelope(self) -> Dict[str, Any]:
        """Build the ``{success, message, errors}`` body for this error."""
        envelope: Dict[str, Any] = {
            "success": False,
            "message": self.message if self.expose else GENERIC_ERROR_MESSAGE,
        }
        if self.errors and self.expose:
            envelope["errors"] = self.errors
        return envelope


class ValidationError(EasyTripError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class DuplicateAccountError(EasyTripError):
    """An account with the same normalized email already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class DuplicateKeyError(EasyTripError):
    """The store rejected an insert because of a uniqueness constraint."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "A record with the same key already exists"


class AccountNotFoundError(EasyTripError):
    """No account matches the supplied email."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InvalidCredentialsError(EasyTripError):
    """The supplied password does not match the stored hash."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class NotFoundError(EasyTripError):
    """No route matches the request path."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(message=f"Route {path} not found")
        self.path = path


class PersistenceError(EasyTripError):
    """The store is unreachable or rejected the query as malformed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Persistence operation failed"
    expose = False


def field_errors_from_validation(exc) -> List[Dict[str, str]]:
    """
    Flatten FastAPI or Pydantic validation errors into ``[{field, message}]``.

    The request-part prefix (``body``, ``query``) is dropped from the location
    so callers see the field names they actually sent.
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


async def easytrip_error_handler(request: Request, exc: EasyTripError) -> JSONResponse:
    """
    Exception handler for the EasyTrip error taxonomy.

    Args:
        request: FastAPI request object
        exc: Raised EasyTrip error

    Returns:
        JSONResponse: Envelope formatted response
    """
    if not exc.expose:
        logger.error(
            "Request failed with internal error",
            extra={
                "path": request.url.path,
                "error_type": type(exc).__name__,
                "error": exc.message,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_envelope(),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failed field of a request schema as a 400 envelope."""
    error = ValidationError(errors=field_errors_from_validation(exc))
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_envelope()),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework-raised HTTP errors (unmatched routes, bad methods) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = NotFoundError(request.url.path)
        return JSONResponse(status_code=error.status_code, content=error.to_envelope())

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to the envelope.

    The exception detail is logged with an error id; callers only get the id
    and a generic message.

    Args:
        request: FastAPI request object
        exc: Unhandled exception

    Returns:
        JSONResponse: Envelope formatted response
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception while processing request",
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error": str(exc),
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": GENERIC_ERROR_MESSAGE,
            "error_id": error_id,
        },
    )


def register_exception_handlers(app) -> None:
    """Register all envelope-producing handlers on the app."""
    app.add_exception_handler(EasyTripError, easytrip_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
