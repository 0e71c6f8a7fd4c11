"""Failure values shared by the request pipeline and its components.

Core components never raise for expected failures. They return a
``Failure`` of exactly one ``ErrorKind``; the API boundary is the only
place that turns it into a status code and a response envelope.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a request can end in."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        """HTTP status equivalent of this kind."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INTERNAL: 500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class Failure:
    """A single failure of one kind.

    Attributes:
        kind: The failure kind.
        messages: Ordered messages. Validation failures carry one per
            violated field; every other kind carries exactly one.
    """

    kind: ErrorKind
    messages: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.messages:
            raise ValueError("A failure needs at least one message")

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def message(self) -> str:
        """Single-line message used in the failure envelope."""
        return ", ".join(self.messages)

    @classmethod
    def not_found(cls, message: str) -> "Failure":
        return cls(ErrorKind.NOT_FOUND, (message,))

    @classmethod
    def validation_failed(cls, messages: list[str] | tuple[str, ...]) -> "Failure":
        return cls(ErrorKind.VALIDATION_FAILED, tuple(messages))

    @classmethod
    def unauthenticated(cls, message: str) -> "Failure":
        return cls(ErrorKind.UNAUTHENTICATED, (message,))

    @classmethod
    def internal(cls, message: str = INTERNAL_ERROR_MESSAGE) -> "Failure":
        return cls(ErrorKind.INTERNAL, (message,))
