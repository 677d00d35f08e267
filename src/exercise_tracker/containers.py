"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from exercise_tracker.adapters.memory_exercise_repository import (
    InMemoryExerciseRepository,
)
from exercise_tracker.adapters.supabase_auth_client import SupabaseAuthClient
from exercise_tracker.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from exercise_tracker.config import MEMORY_BACKEND, SUPABASE_BACKEND, Settings
from exercise_tracker.services.auth import SessionBootstrap
from exercise_tracker.services.exercises import ExerciseService
from exercise_tracker.services.retry import RetryPolicy


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    exercise_service: ExerciseService
    session_bootstrap: SessionBootstrap | None = None


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the container for the configured storage backend."""
    resolved_settings = settings or Settings()
    backend = resolved_settings.storage_backend.lower()
    if backend == MEMORY_BACKEND:
        return AppContainer(
            settings=resolved_settings,
            exercise_service=ExerciseService(InMemoryExerciseRepository()),
        )
    if backend != SUPABASE_BACKEND:
        raise ValueError(f"Unknown storage backend: {resolved_settings.storage_backend}")
    if not resolved_settings.supabase_url or not resolved_settings.supabase_key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for supabase")

    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    retry = RetryPolicy(
        attempts=resolved_settings.retry_attempts,
        base_delay_seconds=resolved_settings.retry_base_delay_seconds,
    )
    repository = SupabaseExerciseRepository(
        client=supabase_client,
        namespace=resolved_settings.app_id,
        retry=retry,
    )
    session_bootstrap = SessionBootstrap(
        client=SupabaseAuthClient(supabase_client),
        retry=retry,
        access_token=resolved_settings.supabase_access_token,
        refresh_token=resolved_settings.supabase_refresh_token,
    )
    return AppContainer(
        settings=resolved_settings,
        exercise_service=ExerciseService(repository),
        session_bootstrap=session_bootstrap,
    )
