"""
Result -> HTTP translation.

Routers call to_response() with the Result returned by a service. The error
code is mapped to a status code by its prefix first ("Validation.Error"),
then by well-known fragments anywhere in the code ("Task.NotOwned").
"""
from http import HTTPStatus
from typing import Any, Optional, Tuple

from django.http import HttpRequest
from ninja import Schema

from .results import Error, Result


class ErrorResponse(Schema):
    code: str
    message: str
    status_code: int
    path: Optional[str] = None
    details: Optional[Any] = None

    @classmethod
    def not_found(cls, message: str, path: Optional[str] = None) -> 'ErrorResponse':
        return cls(code="Resource.NotFound", message=message, status_code=int(HTTPStatus.NOT_FOUND), path=path)

    @classmethod
    def bad_request(cls, message: str, path: Optional[str] = None) -> 'ErrorResponse':
        return cls(code="Request.Invalid", message=message, status_code=int(HTTPStatus.BAD_REQUEST), path=path)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized access.", path: Optional[str] = None) -> 'ErrorResponse':
        return cls(code="Auth.Unauthorized", message=message, status_code=int(HTTPStatus.UNAUTHORIZED), path=path)

    @classmethod
    def forbidden(cls, message: str = "Access forbidden.", path: Optional[str] = None) -> 'ErrorResponse':
        return cls(code="Auth.Forbidden", message=message, status_code=int(HTTPStatus.FORBIDDEN), path=path)

    @classmethod
    def internal_server_error(
        cls, message: str = "An unexpected error occurred.", path: Optional[str] = None
    ) -> 'ErrorResponse':
        return cls(
            code="Server.InternalError",
            message=message,
            status_code=int(HTTPStatus.INTERNAL_SERVER_ERROR),
            path=path,
        )

    @classmethod
    def from_error(cls, error: Error, status_code: int, path: Optional[str] = None) -> 'ErrorResponse':
        return cls(code=error.code, message=error.description, status_code=status_code, path=path)


_PREFIX_STATUS = {
    "Validation": HTTPStatus.BAD_REQUEST,
    "Unauthorized": HTTPStatus.UNAUTHORIZED,
    "Auth": HTTPStatus.UNAUTHORIZED,
    "Forbidden": HTTPStatus.FORBIDDEN,
    "Conflict": HTTPStatus.CONFLICT,
}

# Checked in order against the full code when the prefix is not recognised.
_FRAGMENT_STATUS = (
    ("NotFound", HTTPStatus.NOT_FOUND),
    ("AlreadyExists", HTTPStatus.CONFLICT),
    ("InvalidCredentials", HTTPStatus.UNAUTHORIZED),
    ("NotOwned", HTTPStatus.FORBIDDEN),
)


def status_code_for_error(error: Error) -> int:
    """Map an error code to an HTTP status code."""
    prefix = error.code.split('.')[0]

    if prefix in _PREFIX_STATUS:
        return int(_PREFIX_STATUS[prefix])
    if prefix.endswith("NotFound"):
        return int(HTTPStatus.NOT_FOUND)

    for fragment, status in _FRAGMENT_STATUS:
        if fragment in error.code:
            return int(status)

    return int(HTTPStatus.BAD_REQUEST)


def error_response(request: HttpRequest, error: Error) -> Tuple[int, ErrorResponse]:
    status = status_code_for_error(error)
    return status, ErrorResponse.from_error(error, status, path=request.path)


def to_response(request: HttpRequest, result: Result, success_status: int = HTTPStatus.OK) -> Tuple[int, Any]:
    """
    Translate a service Result into the (status, body) pair django-ninja expects.

    - Success with a value -> (success_status, value)
    - Success without a value -> (204, None)
    - Failure -> (mapped status, ErrorResponse)
    """
    if result.is_failure:
        return error_response(request, result.error)

    if result.value is None:
        return int(HTTPStatus.NO_CONTENT), None

    return int(success_status), result.value
