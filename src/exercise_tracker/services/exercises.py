"""Exercise tracking business logic."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol, TypeVar

from exercise_tracker.domain.errors import (
    ConflictError,
    ExerciseTrackerError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from exercise_tracker.domain.models import (
    AddedExercise,
    ExerciseLog,
    ExerciseRecord,
    LogQuery,
    UserRecord,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")

MSG_USERNAME_REQUIRED = "Please enter a username."
MSG_USERNAME_TAKEN = "This username already exists."
MSG_EXERCISE_FIELDS_REQUIRED = (
    "Please fill in all required fields (user ID, description, duration)."
)
MSG_INVALID_DURATION = "Duration must be a positive number."
MSG_INVALID_DATE = "Dates must use the YYYY-MM-DD format."
MSG_LOG_USER_REQUIRED = "Please provide a user ID to fetch the log."
MSG_USER_NOT_FOUND = "No user found with this ID."

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


class ExerciseRepository(Protocol):
    """Persistence interface for users and their exercise records."""

    def find_user_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user for an identifier, if present."""

    def create_user(self, username: str) -> UserRecord:
        """Create and return a new user."""

    def list_users(self) -> list[UserRecord]:
        """Return all users in creation order."""

    def add_exercise(self, user_id: str, exercise: ExerciseRecord) -> None:
        """Append an exercise record to the user's log."""

    def list_exercises(self, user_id: str, query: LogQuery) -> list[ExerciseRecord]:
        """Return the user's records filtered by date and truncated to the limit."""


def _today_utc() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class ExerciseService:
    """Application service for users and their exercise logs."""

    repository: ExerciseRepository
    today: Callable[[], date] = _today_utc

    def create_user(self, username: str | None) -> UserRecord:
        """Create a user with a unique username."""
        cleaned = (username or "").strip()
        if not cleaned:
            raise ValidationError(MSG_USERNAME_REQUIRED)

        def create() -> UserRecord:
            # Check-then-insert is not atomic; concurrent creations can both pass.
            if self.repository.find_user_by_username(cleaned) is not None:
                raise ConflictError(MSG_USERNAME_TAKEN)
            return self.repository.create_user(cleaned)

        user = self._run(create, failure="Error while creating the user.")
        _logger.info("Created user %s", user.id)
        return user

    def list_users(self) -> list[UserRecord]:
        """Return every user."""
        return self._run(
            self.repository.list_users, failure="Error while listing users."
        )

    def add_exercise(
        self,
        user_id: str | None,
        description: str | None,
        duration: str | int | float | None,
        exercise_date: str | None = None,
    ) -> AddedExercise:
        """Validate and store an exercise for an existing user."""
        cleaned_id = (user_id or "").strip()
        cleaned_description = (description or "").strip()
        if not cleaned_id or not cleaned_description or _is_blank(duration):
            raise ValidationError(MSG_EXERCISE_FIELDS_REQUIRED)
        minutes = parse_duration(duration)
        day = parse_date(exercise_date) or self.today()
        exercise = ExerciseRecord(
            description=cleaned_description, duration=minutes, date=day
        )

        def add() -> AddedExercise:
            user = self.repository.get_user(cleaned_id)
            if user is None:
                raise NotFoundError(MSG_USER_NOT_FOUND)
            self.repository.add_exercise(user.id, exercise)
            return AddedExercise(user=user, exercise=exercise)

        return self._run(add, failure="Error while adding the exercise.")

    def get_log(
        self,
        user_id: str | None,
        start: str | None = None,
        end: str | None = None,
        limit: str | int | None = None,
    ) -> ExerciseLog:
        """Return a user's exercises within an inclusive date range."""
        cleaned_id = (user_id or "").strip()
        if not cleaned_id:
            raise ValidationError(MSG_LOG_USER_REQUIRED)
        query = LogQuery(
            start=parse_date(start), end=parse_date(end), limit=parse_limit(limit)
        )

        def fetch() -> ExerciseLog:
            user = self.repository.get_user(cleaned_id)
            if user is None:
                raise NotFoundError(MSG_USER_NOT_FOUND)
            exercises = self.repository.list_exercises(user.id, query)
            return ExerciseLog(user=user, exercises=exercises)

        return self._run(fetch, failure="Error while fetching the exercise log.")

    def _run(self, func: Callable[[], T], *, failure: str) -> T:
        try:
            return func()
        except ExerciseTrackerError:
            raise
        except Exception as exc:
            _logger.exception(failure)
            raise ServiceUnavailableError(failure) from exc


def parse_duration(raw: str | int | float | None) -> int:
    """Parse a duration in minutes; it must be a positive integer."""
    minutes = _parse_int(raw)
    if minutes is None or minutes <= 0:
        raise ValidationError(MSG_INVALID_DURATION)
    return minutes


def parse_date(raw: str | None) -> date | None:
    """Parse an optional ``YYYY-MM-DD`` date."""
    if raw is None or not raw.strip():
        return None
    cleaned = raw.strip()
    if not _ISO_DATE.fullmatch(cleaned):
        raise ValidationError(MSG_INVALID_DATE)
    try:
        return date.fromisoformat(cleaned)
    except ValueError as exc:
        raise ValidationError(MSG_INVALID_DATE) from exc


def parse_limit(raw: str | int | None) -> int | None:
    """Parse a result limit; anything but a positive integer means no limit."""
    value = _parse_int(raw)
    return value if value is not None and value > 0 else None


def _parse_int(raw: str | int | float | None) -> int | None:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    cleaned = str(raw).strip()
    if not _SIGNED_INT.fullmatch(cleaned):
        return None
    return int(cleaned, 10)


def _is_blank(value: str | int | float | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
