from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from app.storage import NotFoundError

if TYPE_CHECKING:
    from .state import RequestStatus


class RequestServiceError(RuntimeError):
    """Base error for service request issues."""


class ValidationError(RequestServiceError):
    """Raised when request fields are missing or invalid.

    ``errors`` maps each offending field to a user-facing message.
    """

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid request fields ({detail})")


class InvalidTransitionError(RequestServiceError):
    """Raised when attempting a status change the lifecycle does not allow."""

    def __init__(self, current: RequestStatus, target: RequestStatus, reason: str | None = None) -> None:
        self.current = current
        self.target = target
        message = f"Invalid request status transition: {current.value} -> {target.value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RequestNotFoundError(RequestServiceError, NotFoundError):
    """Raised when a request could not be located."""
