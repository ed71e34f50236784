"""
Result and Error values shared by all services.

Services never raise for expected business failures (missing rows, ownership,
duplicate emails). They return a Result carrying either a value or an Error,
and the API layer maps the error code to an HTTP status.

Usage:
    from apps.core.results import Result, DomainErrors

    if task is None:
        return Result.failure(DomainErrors.Task.not_found(task_id))
    return Result.success(to_task_response(task))
"""
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

T = TypeVar('T')
R = TypeVar('R')


class ResultAccessError(RuntimeError):
    """Raised when reading the value of a failed result (or the error of a successful one)."""


@dataclass(frozen=True)
class Error:
    """
    A failure description with a stable, dotted code ("Task.NotFound")
    and a human readable description.
    """
    code: str
    description: str

    @classmethod
    def not_found(cls, entity_name: str, identifier: Union[int, str]) -> 'Error':
        if isinstance(identifier, int):
            description = f"{entity_name} with ID {identifier} was not found."
        else:
            description = f"{entity_name} '{identifier}' was not found."
        return cls(f"{entity_name}.NotFound", description)

    @classmethod
    def validation(cls, description: str) -> 'Error':
        return cls("Validation.Error", description)

    @classmethod
    def conflict(cls, description: str) -> 'Error':
        return cls("Conflict.Error", description)

    @classmethod
    def unauthorized(cls, description: str) -> 'Error':
        return cls("Unauthorized.Error", description)


Error.NONE = Error("", "")


class DomainErrors:
    """
    Canonical errors for the application.
    Prevents scattered error codes and typos across apps.
    """

    class User:
        EMAIL_ALREADY_EXISTS = Error(
            "User.EmailAlreadyExists", "A user with this email already exists."
        )
        INVALID_CREDENTIALS = Error(
            "User.InvalidCredentials", "Invalid email or password."
        )

        @staticmethod
        def not_found(email: str) -> Error:
            return Error.not_found("User", email)

    class Task:
        NOT_OWNED = Error(
            "Task.NotOwned", "You do not have permission to access this task."
        )

        @staticmethod
        def not_found(task_id: int) -> Error:
            return Error.not_found("Task", task_id)


class Result(Generic[T]):
    """
    Success/failure wrapper.

    A successful Result holds a value (None for commands such as delete);
    a failed Result holds an Error. Accessing the wrong side raises
    ResultAccessError.
    """

    __slots__ = ('_is_success', '_value', '_error')

    def __init__(self, is_success: bool, value: Optional[T] = None, error: Optional[Error] = None):
        if is_success and error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not is_success and error is None:
            raise ValueError("A failed result must carry an error")
        self._is_success = is_success
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: Optional[T] = None) -> 'Result[T]':
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: Error) -> 'Result[T]':
        return cls(False, error=error)

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def value(self) -> T:
        if not self._is_success:
            raise ResultAccessError(
                "Cannot access value on a failed result. Check is_success first."
            )
        return self._value

    @property
    def error(self) -> Error:
        if self._is_success:
            raise ResultAccessError(
                "Cannot access error on a successful result. Check is_failure first."
            )
        return self._error

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[Error], R]) -> R:
        if self._is_success:
            return on_success(self._value)
        return on_failure(self._error)

    def __repr__(self):
        if self._is_success:
            return f"Result.success({self._value!r})"
        return f"Result.failure({self._error!r})"
