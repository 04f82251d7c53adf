"""Error kinds shared by every app.

Each app declares its own ``ErrorCode`` enum and concrete errors in
``domain/errors.py``; the kind is what callers branch on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Stable error categories exposed to callers."""

    NOT_FOUND = "NOT_FOUND"
    INACTIVE_OR_CLOSED = "INACTIVE_OR_CLOSED"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: Enum
    message: str

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION_ERROR

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class InactiveOrClosedError(DomainError):
    kind = ErrorKind.INACTIVE_OR_CLOSED


class InsufficientInventoryError(DomainError):
    kind = ErrorKind.INSUFFICIENT_INVENTORY


class ConflictError(DomainError):
    kind = ErrorKind.CONFLICT


class RequestValidationError(DomainError):
    kind = ErrorKind.VALIDATION_ERROR
