"""Domain error codes for the catalog module."""

from enum import Enum

from common.errors import ConflictError, NotFoundError, RequestValidationError


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    EVENT_NOT_DRAFT = "EVENT_NOT_DRAFT"
    EVENT_ALREADY_CANCELLED = "EVENT_ALREADY_CANCELLED"


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )


class InvalidEventIdError(RequestValidationError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class EventNotDraftError(ConflictError):
    """Raised when publishing an event that is not a draft."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_DRAFT,
            message="Only draft events can be published",
        )


class EventAlreadyCancelledError(ConflictError):
    """Raised when cancelling an event twice."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_ALREADY_CANCELLED,
            message="Event is already cancelled",
        )
