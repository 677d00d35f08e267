"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

import pytest

from exercise_tracker.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from exercise_tracker.domain.models import ExerciseRecord, LogQuery
from tests.conftest import UnavailableError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_limit: int | None = None
    last_order: str | None = None
    failures: int = 0
    executions: int = 0

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def _start(self, action: str) -> "FakeTable":
        self._action = action
        self.last_filters = []
        self.last_limit = None
        self.last_order = None
        return self

    def select(self, *_args) -> "FakeTable":
        return self._start("select")

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("insert")

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = column
        return self

    def execute(self) -> FakeResponse:
        self.executions += 1
        if self.failures > 0:
            self.failures -= 1
            raise UnavailableError()
        queue = self.response_queue.get(self._action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@pytest.fixture
def client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def supabase_repository(client, retry) -> SupabaseExerciseRepository:
    return SupabaseExerciseRepository(client, namespace="test-app", retry=retry)


def test_supabase_create_and_find_user(client, supabase_repository) -> None:
    users_table = client.table("users")
    user_id = str(uuid4())
    users_table.queue("insert", [{"id": user_id, "username": "alice"}])
    users_table.queue("select", [{"id": user_id, "username": "alice"}])

    created = supabase_repository.create_user("alice")
    assert users_table.last_payload == {"app_id": "test-app", "username": "alice"}
    fetched = supabase_repository.find_user_by_username("alice")

    assert created.id == user_id
    assert fetched == created
    assert ("eq", "app_id", "test-app") in users_table.last_filters
    assert ("eq", "username", "alice") in users_table.last_filters


def test_supabase_get_user_skips_malformed_ids(client, supabase_repository) -> None:
    assert supabase_repository.get_user("not-a-uuid") is None
    assert client.tables == {}


def test_supabase_get_user_missing(client, supabase_repository) -> None:
    assert supabase_repository.get_user(str(uuid4())) is None
    assert client.table("users").executions == 1


def test_supabase_add_exercise_stores_iso_date(client, supabase_repository) -> None:
    user_id = str(uuid4())

    supabase_repository.add_exercise(
        user_id, ExerciseRecord(description="run", duration=30, date=date(2024, 1, 15))
    )

    assert client.table("exercise_logs").last_payload == {
        "app_id": "test-app",
        "user_id": user_id,
        "description": "run",
        "duration": 30,
        "date": "2024-01-15",
    }


def test_supabase_list_exercises_pushes_filters(client, supabase_repository) -> None:
    logs_table = client.table("exercise_logs")
    logs_table.queue(
        "select", [{"description": "swim", "duration": 45, "date": "2024-01-15"}]
    )
    user_id = str(uuid4())

    records = supabase_repository.list_exercises(
        user_id,
        LogQuery(start=date(2024, 1, 10), end=date(2024, 1, 31), limit=2),
    )

    assert records == [
        ExerciseRecord(description="swim", duration=45, date=date(2024, 1, 15))
    ]
    assert ("eq", "user_id", user_id) in logs_table.last_filters
    assert ("gte", "date", "2024-01-10") in logs_table.last_filters
    assert ("lte", "date", "2024-01-31") in logs_table.last_filters
    assert logs_table.last_order == "id"
    assert logs_table.last_limit == 2


def test_supabase_list_users(client, supabase_repository) -> None:
    client.table("users").queue(
        "select",
        [{"id": "a", "username": "alice"}, {"id": "b", "username": "bob"}],
    )

    users = supabase_repository.list_users()

    assert [user.username for user in users] == ["alice", "bob"]


def test_supabase_calls_are_retried(client, supabase_repository, sleep) -> None:
    users_table = client.table("users")
    users_table.failures = 2
    users_table.queue("select", [{"id": "a", "username": "alice"}])

    user = supabase_repository.find_user_by_username("alice")

    assert user is not None
    assert users_table.executions == 3
    assert sleep.delays == [1.0, 2.0]


def test_supabase_list_exercises_retried_query_rebuilds_filters(
    client, supabase_repository, sleep
) -> None:
    logs_table = client.table("exercise_logs")
    logs_table.failures = 1
    logs_table.queue(
        "select", [{"description": "run", "duration": 30, "date": "2024-01-01"}]
    )

    records = supabase_repository.list_exercises(
        str(uuid4()), LogQuery(start=date(2024, 1, 1))
    )

    assert [record.description for record in records] == ["run"]
    assert logs_table.executions == 2
    assert logs_table.last_filters.count(("gte", "date", "2024-01-01")) == 1
    assert sleep.delays == [1.0]
