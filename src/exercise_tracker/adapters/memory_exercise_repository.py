"""In-memory exercise repository for the simulated backend."""

from dataclasses import dataclass, field
from uuid import uuid4

from exercise_tracker.domain.models import ExerciseRecord, LogQuery, UserRecord
from exercise_tracker.services.exercises import ExerciseRepository


@dataclass
class InMemoryExerciseRepository(ExerciseRepository):
    """Keeps users and exercises in process memory; nothing survives a restart."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    exercises: dict[str, list[ExerciseRecord]] = field(default_factory=dict)

    def find_user_by_username(self, username: str) -> UserRecord | None:
        for user in self.users.values():
            if user.username == username:
                return user
        return None

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, username: str) -> UserRecord:
        user = UserRecord(id=uuid4().hex, username=username)
        self.users[user.id] = user
        self.exercises[user.id] = []
        return user

    def list_users(self) -> list[UserRecord]:
        return list(self.users.values())

    def add_exercise(self, user_id: str, exercise: ExerciseRecord) -> None:
        self.exercises.setdefault(user_id, []).append(exercise)

    def list_exercises(self, user_id: str, query: LogQuery) -> list[ExerciseRecord]:
        records = self.exercises.get(user_id, [])
        if query.start is not None:
            records = [record for record in records if record.date >= query.start]
        if query.end is not None:
            records = [record for record in records if record.date <= query.end]
        if query.limit is not None:
            records = records[: query.limit]
        return list(records)
