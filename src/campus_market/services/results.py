"""Tagged results returned by every marketplace action.

Components never raise for expected failures (missing rows, authorization,
validation); they return a :class:`Failure` carrying an :class:`ErrorKind`
and a user-presentable message. Exceptions are reserved for faults the
handler boundary has to log.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

__all__ = [
    "ErrorKind",
    "Failure",
    "Result",
    "StoreFailure",
    "Success",
    "conflict",
    "not_authenticated",
    "not_found",
    "unauthorized",
    "validation_failed",
]


class ErrorKind(str, enum.Enum):
    """Failure taxonomy shared by all actions."""

    NOT_AUTHENTICATED = "not_authenticated"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    STORE_FAILURE = "store_failure"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome wrapping the action's value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed outcome with a stable, user-presentable message."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]


class StoreFailure(Exception):
    """Raised by the entity store when the backing database errors or times out."""


def not_authenticated(message: str = "Not authenticated") -> Failure:
    return Failure(ErrorKind.NOT_AUTHENTICATED, message)


def unauthorized(message: str = "Unauthorized") -> Failure:
    return Failure(ErrorKind.UNAUTHORIZED, message)


def not_found(entity: str) -> Failure:
    return Failure(ErrorKind.NOT_FOUND, f"{entity} not found")


def validation_failed(message: str) -> Failure:
    return Failure(ErrorKind.VALIDATION_FAILED, message)


def conflict(message: str) -> Failure:
    return Failure(ErrorKind.CONFLICT, message)
