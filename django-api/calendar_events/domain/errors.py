"""Domain error codes for the calendar events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_EVENT = "INVALID_EVENT"
    INVALID_RECURRENCE = "INVALID_RECURRENCE"
    GATEWAY_ERROR = "GATEWAY_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when a mutation or lookup targets an id the store does not hold."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidEventError(DomainError):
    """Raised when requested changes would leave an event invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT, message=message)


class InvalidRecurrenceError(DomainError):
    """Raised when a repeat rule cannot be expanded.

    Caught before any gateway call is made.
    """

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_RECURRENCE, message=message)


class GatewayError(DomainError):
    """Raised when the remote store rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(code=ErrorCode.GATEWAY_ERROR, message=message)
        self.status_code = status_code
