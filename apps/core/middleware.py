"""
Global exception handling.

Every exception that escapes a view is turned into an ErrorResponse JSON body
with a status code chosen from the exception type. The same mapping backs the
django-ninja exception handlers registered in config/urls.py, so API errors
and plain Django view errors look the same to clients.
"""
import asyncio
import logging
import traceback
from http import HTTPStatus
from typing import Tuple

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.db import DatabaseError, IntegrityError
from django.http import Http404, HttpRequest, JsonResponse
from django.utils.deprecation import MiddlewareMixin
from ninja.errors import HttpError, ValidationError as NinjaValidationError

from .responses import ErrorResponse

logger = logging.getLogger(__name__)

CLIENT_CLOSED_REQUEST = 499

_UNIQUE_MARKERS = ("unique", "duplicate", "ix_")
_FOREIGN_KEY_MARKERS = ("foreign key", "fk_")
_CONCURRENCY_MARKERS = ("did not affect any rows",)

_HTTP_ERROR_CODES = {
    HTTPStatus.BAD_REQUEST: "Request.Invalid",
    HTTPStatus.UNAUTHORIZED: "Auth.Unauthorized",
    HTTPStatus.FORBIDDEN: "Auth.Forbidden",
    HTTPStatus.NOT_FOUND: "Resource.NotFound",
    HTTPStatus.CONFLICT: "Request.Conflict",
}


def _contains_any(message: str, markers) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in markers)


def _validation_details(errors) -> list:
    # pydantic error contexts may hold exception instances; keep the JSON-safe parts
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in errors
    ]


def _database_error_message(exception: DatabaseError) -> str:
    cause = exception.__cause__
    return str(cause) if cause is not None else str(exception)


def _map_integrity_error(exception: IntegrityError, path: str) -> Tuple[int, ErrorResponse]:
    message = _database_error_message(exception)

    if _contains_any(message, _UNIQUE_MARKERS):
        status = int(HTTPStatus.CONFLICT)
        return status, ErrorResponse(
            code="Database.UniqueConstraintViolation",
            message="A record with the same unique value already exists.",
            status_code=status,
            path=path,
        )

    if _contains_any(message, _FOREIGN_KEY_MARKERS):
        status = int(HTTPStatus.BAD_REQUEST)
        return status, ErrorResponse(
            code="Database.ForeignKeyViolation",
            message="The operation violates a foreign key constraint. Ensure referenced records exist.",
            status_code=status,
            path=path,
        )

    status = int(HTTPStatus.INTERNAL_SERVER_ERROR)
    return status, ErrorResponse(
        code="Database.UpdateError",
        message="An error occurred while updating the database.",
        status_code=status,
        path=path,
    )


def map_exception(exception: BaseException, path: str) -> Tuple[int, ErrorResponse]:
    """
    Choose the status code and ErrorResponse for an exception.

    Order matters: more specific types are checked before their bases
    (IntegrityError before DatabaseError, ninja's ValidationError before
    ValueError).
    """
    if isinstance(exception, NinjaValidationError):
        status = int(HTTPStatus.BAD_REQUEST)
        return status, ErrorResponse(
            code="Validation.Error",
            message="One or more validation errors occurred.",
            status_code=status,
            path=path,
            details=_validation_details(exception.errors),
        )

    if isinstance(exception, HttpError):
        status = exception.status_code
        return status, ErrorResponse(
            code=_HTTP_ERROR_CODES.get(status, "Request.Error"),
            message=str(exception),
            status_code=status,
            path=path,
        )

    if isinstance(exception, ValueError):
        status = int(HTTPStatus.BAD_REQUEST)
        return status, ErrorResponse(
            code="Validation.ArgumentError",
            message=str(exception),
            status_code=status,
            path=path,
        )

    if isinstance(exception, (ObjectDoesNotExist, Http404)):
        return int(HTTPStatus.NOT_FOUND), ErrorResponse.not_found(
            "The requested resource was not found.", path=path
        )

    if isinstance(exception, IntegrityError):
        return _map_integrity_error(exception, path)

    if isinstance(exception, DatabaseError) and _contains_any(str(exception), _CONCURRENCY_MARKERS):
        status = int(HTTPStatus.CONFLICT)
        return status, ErrorResponse(
            code="Database.ConcurrencyConflict",
            message="The record was modified by another user. Please refresh and try again.",
            status_code=status,
            path=path,
        )

    if isinstance(exception, PermissionError):
        return int(HTTPStatus.UNAUTHORIZED), ErrorResponse.unauthorized(path=path)

    if isinstance(exception, PermissionDenied):
        return int(HTTPStatus.FORBIDDEN), ErrorResponse.forbidden(path=path)

    if isinstance(exception, asyncio.CancelledError):
        return CLIENT_CLOSED_REQUEST, ErrorResponse(
            code="Request.Cancelled",
            message="The request was cancelled.",
            status_code=CLIENT_CLOSED_REQUEST,
            path=path,
        )

    if isinstance(exception, RuntimeError):
        status = int(HTTPStatus.BAD_REQUEST)
        return status, ErrorResponse(
            code="Operation.Invalid",
            message=str(exception),
            status_code=status,
            path=path,
        )

    return int(HTTPStatus.INTERNAL_SERVER_ERROR), ErrorResponse.internal_server_error(path=path)


def _log_exception(exception: BaseException, status: int, path: str) -> None:
    message = "Exception occurred while processing request %s. Status: %s"
    if status >= 500:
        logger.error(message, path, status, exc_info=exception)
    elif status >= 400:
        logger.warning(message, path, status, exc_info=exception)
    else:
        logger.info(message, path, status)


def handle_exception(request: HttpRequest, exception: BaseException) -> JsonResponse:
    """Build the JSON error response for an exception raised while serving request."""
    path = request.path
    status, error = map_exception(exception, path)

    _log_exception(exception, status, path)

    if settings.DEBUG and status == HTTPStatus.INTERNAL_SERVER_ERROR:
        error.details = ''.join(
            traceback.format_exception(type(exception), exception, exception.__traceback__)
        )

    return JsonResponse(error.model_dump(), status=status)


class GlobalExceptionMiddleware(MiddlewareMixin):
    """
    Converts unhandled view exceptions to structured JSON errors.
    Must be listed first in MIDDLEWARE so it wraps everything else.
    """

    def process_exception(self, request, exception):
        return handle_exception(request, exception)
