"""Error catalog and domain exceptions.

Business-rule failures are raised as `CoffeeError` subclasses by the service
layer and turned into status codes by the exception handlers registered in
`server.create_app`. Anything else is an unexpected fault and becomes a 500.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """Represents a stable error code used in the error envelope."""

    code: str
    default_message: str

    def as_error(self, *, message: str | None = None, details: Any | None = None) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": message if message is not None else self.default_message,
            "details": details,
        }


COFFEE_NOT_FOUND = ErrorCode(
    code="COFFEE_NOT_FOUND",
    default_message="No coffee exists with the requested id.",
)

VERSION_CONFLICT = ErrorCode(
    code="VERSION_CONFLICT",
    default_message="If-Match does not match the current version of the coffee.",
)

PRECONDITION_REQUIRED = ErrorCode(
    code="PRECONDITION_REQUIRED",
    default_message="Updates require an If-Match header carrying the current version.",
)

PRECONDITION_INVALID = ErrorCode(
    code="PRECONDITION_INVALID",
    default_message="If-Match must be a version number, optionally quoted.",
)

UNEXPECTED_ERROR = ErrorCode(
    code="UNEXPECTED_ERROR",
    default_message="Unexpected error in coffee service.",
)


class CoffeeError(Exception):
    """Base class for failures that map onto a client-visible status code."""

    status_code = 500
    error_code = UNEXPECTED_ERROR
    # Not found and conflict are answered with an empty body.
    empty_body = False

    def __init__(self, coffee_id: int, message: str | None = None) -> None:
        self.coffee_id = coffee_id
        super().__init__(message or self.error_code.default_message)

    def as_error(self) -> dict[str, Any]:
        return self.error_code.as_error(message=str(self), details={"id": self.coffee_id})


class CoffeeNotFound(CoffeeError):
    status_code = 404
    error_code = COFFEE_NOT_FOUND
    empty_body = True


class VersionConflict(CoffeeError):
    status_code = 409
    error_code = VERSION_CONFLICT
    empty_body = True

    def __init__(self, coffee_id: int, *, expected: int, current: int | None) -> None:
        self.expected = expected
        self.current = current
        super().__init__(coffee_id, f"coffee {coffee_id}: If-Match {expected} != current version {current}")


class PreconditionRequired(CoffeeError):
    status_code = 428
    error_code = PRECONDITION_REQUIRED


class PreconditionInvalid(CoffeeError):
    status_code = 400
    error_code = PRECONDITION_INVALID

    def __init__(self, coffee_id: int, raw: str) -> None:
        self.raw = raw
        super().__init__(coffee_id)

    def as_error(self) -> dict[str, Any]:
        return self.error_code.as_error(message=str(self), details={"id": self.coffee_id, "ifMatch": self.raw})


def error_from_exception(exc: Exception, *, include_details: bool = False) -> dict[str, Any]:
    """Convert an unexpected exception into the error envelope shape.

    Exception type and message are only exposed when debugging is enabled.
    """

    details = {"type": type(exc).__name__, "message": str(exc)} if include_details else None
    return UNEXPECTED_ERROR.as_error(details=details)
