"""Domain models for the exercise tracker."""

from dataclasses import dataclass, field
from datetime import date

DATE_DISPLAY_FORMAT = "%a %b %d %Y"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    username: str


@dataclass(frozen=True)
class ExerciseRecord:
    """One logged activity owned by a user."""

    description: str
    duration: int
    date: date

    @property
    def display_date(self) -> str:
        """Return the date as a calendar-date string, e.g. ``Mon Jan 15 2024``."""
        return self.date.strftime(DATE_DISPLAY_FORMAT)


@dataclass(frozen=True)
class AddedExercise:
    """Stored exercise merged with its owner."""

    user: UserRecord
    exercise: ExerciseRecord


@dataclass(frozen=True)
class LogQuery:
    """Date range and result limit for a log lookup."""

    start: date | None = None
    end: date | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ExerciseLog:
    """Filtered and truncated view of a user's exercises."""

    user: UserRecord
    exercises: list[ExerciseRecord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.exercises)
