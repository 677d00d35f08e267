"""Supabase-backed exercise repository."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from postgrest import APIResponse
from supabase import Client

from exercise_tracker.domain.models import ExerciseRecord, LogQuery, UserRecord
from exercise_tracker.services.exercises import ExerciseRepository
from exercise_tracker.services.retry import RetryPolicy

USERS_TABLE = "users"
EXERCISES_TABLE = "exercise_logs"


@dataclass
class SupabaseExerciseRepository(ExerciseRepository):
    """Supabase implementation for users and exercise logs.

    Rows of every deployment share the same tables; ``namespace`` is written
    to and filtered on the ``app_id`` column of each of them.
    """

    client: Client
    namespace: str
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def find_user_by_username(self, username: str) -> UserRecord | None:
        """Return the user with this username, if present."""
        response = self.retry.call(
            lambda: self.client.table(USERS_TABLE)
            .select("id, username")
            .eq("app_id", self.namespace)
            .eq("username", username)
            .limit(1)
            .execute(),
            action="find_user_by_username",
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user for an identifier, if present."""
        if not _is_uuid(user_id):
            return None
        response = self.retry.call(
            lambda: self.client.table(USERS_TABLE)
            .select("id, username")
            .eq("app_id", self.namespace)
            .eq("id", user_id)
            .limit(1)
            .execute(),
            action="get_user",
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, username: str) -> UserRecord:
        """Insert a user row and return it."""
        response = self.retry.call(
            lambda: self.client.table(USERS_TABLE)
            .insert({"app_id": self.namespace, "username": username})
            .execute(),
            action="create_user",
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return users of this namespace in creation order."""
        response = self.retry.call(
            lambda: self.client.table(USERS_TABLE)
            .select("id, username")
            .eq("app_id", self.namespace)
            .order("created_at", desc=False)
            .execute(),
            action="list_users",
        )
        return [_parse_user(row) for row in response.data or []]

    def add_exercise(self, user_id: str, exercise: ExerciseRecord) -> None:
        """Insert an exercise row owned by the user."""
        self.retry.call(
            lambda: self.client.table(EXERCISES_TABLE)
            .insert(
                {
                    "app_id": self.namespace,
                    "user_id": user_id,
                    "description": exercise.description,
                    "duration": exercise.duration,
                    "date": exercise.date.isoformat(),
                }
            )
            .execute(),
            action="add_exercise",
        )

    def list_exercises(self, user_id: str, query: LogQuery) -> list[ExerciseRecord]:
        """Return the user's rows in insertion order, filtered and limited."""

        def execute() -> APIResponse:
            request = (
                self.client.table(EXERCISES_TABLE)
                .select("description, duration, date")
                .eq("app_id", self.namespace)
                .eq("user_id", user_id)
            )
            if query.start is not None:
                request = request.gte("date", query.start.isoformat())
            if query.end is not None:
                request = request.lte("date", query.end.isoformat())
            request = request.order("id", desc=False)
            if query.limit is not None:
                request = request.limit(query.limit)
            return request.execute()

        response = self.retry.call(execute, action="list_exercises")
        return [_parse_exercise(row) for row in response.data or []]


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(id=str(row["id"]), username=str(row["username"]))


def _parse_exercise(row: dict[str, object]) -> ExerciseRecord:
    return ExerciseRecord(
        description=str(row.get("description", "")),
        duration=int(row.get("duration", 0)),
        date=date.fromisoformat(str(row["date"])),
    )


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True
