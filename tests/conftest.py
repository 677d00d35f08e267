"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from exercise_tracker.adapters.memory_exercise_repository import (
    InMemoryExerciseRepository,
)
from exercise_tracker.config import Settings
from exercise_tracker.containers import AppContainer
from exercise_tracker.domain.auth import AuthSession
from exercise_tracker.services.auth import AuthClient, SessionBootstrap
from exercise_tracker.services.exercises import ExerciseService
from exercise_tracker.services.retry import RetryPolicy

FIXED_TODAY = date(2024, 3, 5)


@dataclass
class RecordingSleep:
    """Sleep replacement that records requested delays."""

    delays: list[float] = field(default_factory=list)

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class UnavailableError(Exception):
    """Mimics a client error whose code marks the service as unavailable."""

    def __init__(self, message: str = "service unavailable") -> None:
        super().__init__(message)
        self.code = "unavailable"


@dataclass
class FakeAuthClient(AuthClient):
    """Fake identity provider that records sign-in calls."""

    calls: list[str] = field(default_factory=list)
    failures_before_success: int = 0

    def sign_in_anonymously(self) -> AuthSession:
        self.calls.append("anonymous")
        self._maybe_fail()
        return AuthSession(user_id="anon-uid", anonymous=True)

    def sign_in_with_token(self, access_token: str, refresh_token: str) -> AuthSession:
        self.calls.append(f"token:{access_token}")
        self._maybe_fail()
        return AuthSession(user_id="token-uid", anonymous=False)

    def _maybe_fail(self) -> None:
        if self.failures_before_success > 0:
            self.failures_before_success -= 1
            raise UnavailableError()


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", app_id="test-app")


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry(sleep: RecordingSleep) -> RetryPolicy:
    return RetryPolicy(sleep=sleep)


@pytest.fixture
def repository() -> InMemoryExerciseRepository:
    return InMemoryExerciseRepository()


@pytest.fixture
def service(repository: InMemoryExerciseRepository) -> ExerciseService:
    return ExerciseService(repository, today=lambda: FIXED_TODAY)


@pytest.fixture
def container(settings: Settings, service: ExerciseService) -> AppContainer:
    return AppContainer(settings=settings, exercise_service=service)


@pytest.fixture
def supabase_container(
    settings: Settings, service: ExerciseService, retry: RetryPolicy
) -> AppContainer:
    supabase_settings = settings.model_copy(update={"storage_backend": "supabase"})
    return AppContainer(
        settings=supabase_settings,
        exercise_service=service,
        session_bootstrap=SessionBootstrap(client=FakeAuthClient(), retry=retry),
    )
