"""Error taxonomy for exercise tracker operations."""

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failure categories reported to callers."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"


class ExerciseTrackerError(Exception):
    """Base class for errors surfaced to the user as a status message."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ExerciseTrackerError):
    """A required field is empty or malformed."""

    kind = ErrorKind.VALIDATION


class NotFoundError(ExerciseTrackerError):
    """The user identifier does not resolve to a user."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(ExerciseTrackerError):
    """The username is already taken."""

    kind = ErrorKind.CONFLICT


class ServiceUnavailableError(ExerciseTrackerError):
    """The storage backend failed or retries were exhausted."""

    kind = ErrorKind.TRANSIENT
