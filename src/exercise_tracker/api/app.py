"""FastAPI application factory."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from exercise_tracker.api.models import AddExerciseRequest, CreateUserRequest
from exercise_tracker.api.ui import FORM_UI_HTML
from exercise_tracker.app_logging import configure_logging
from exercise_tracker.containers import AppContainer
from exercise_tracker.domain.auth import AuthSession
from exercise_tracker.domain.errors import ErrorKind, ExerciseTrackerError
from exercise_tracker.domain.models import AddedExercise, ExerciseLog, UserRecord

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        bootstrap = app.state.container.session_bootstrap
        if bootstrap is not None:
            try:
                app.state.auth_session = await asyncio.to_thread(
                    bootstrap.authenticate
                )
            except Exception:
                logger.exception("Failed to authenticate storage session")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.auth_session = None

    @app.exception_handler(ExerciseTrackerError)
    async def handle_tracker_error(
        request: Request, exc: ExerciseTrackerError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_STATUS_BY_KIND[exc.kind],
            content={"error": exc.kind.value, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_STATUS_BY_KIND[ErrorKind.VALIDATION],
            content={
                "error": ErrorKind.VALIDATION.value,
                "message": _request_error_message(exc),
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def form_ui() -> HTMLResponse:
        """Minimal form page that drives the REST routes."""
        return HTMLResponse(FORM_UI_HTML)

    @app.get("/api/session")
    async def session(request: Request) -> dict[str, object]:
        """Return the identity the storage client is authenticated as."""
        state_container: AppContainer = request.app.state.container
        if state_container.session_bootstrap is None:
            return {"uid": None, "anonymous": True, "backend": "memory"}
        auth_session: AuthSession | None = request.app.state.auth_session
        if auth_session is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Storage session is not authenticated.",
            )
        return {
            "uid": auth_session.user_id,
            "anonymous": auth_session.anonymous,
            "backend": state_container.settings.storage_backend,
        }

    @app.post("/api/users")
    def create_user(body: CreateUserRequest, request: Request) -> dict[str, object]:
        """Create a user with a unique username."""
        state_container: AppContainer = request.app.state.container
        user = state_container.exercise_service.create_user(body.username)
        return _user_payload(user)

    @app.get("/api/users")
    def list_users(request: Request) -> list[dict[str, object]]:
        """Return all users."""
        state_container: AppContainer = request.app.state.container
        return [
            _user_payload(user)
            for user in state_container.exercise_service.list_users()
        ]

    @app.post("/api/users/{user_id}/exercises")
    def add_exercise(
        user_id: str, body: AddExerciseRequest, request: Request
    ) -> dict[str, object]:
        """Log an exercise for a user."""
        state_container: AppContainer = request.app.state.container
        added = state_container.exercise_service.add_exercise(
            user_id, body.description, body.duration, body.date
        )
        return _added_exercise_payload(added)

    @app.get("/api/users/{user_id}/logs")
    def get_log(
        user_id: str,
        request: Request,
        start: str | None = Query(default=None, alias="from"),
        end: str | None = Query(default=None, alias="to"),
        limit: str | None = None,
    ) -> dict[str, object]:
        """Return a user's exercise log filtered by date and limited in size."""
        state_container: AppContainer = request.app.state.container
        log = state_container.exercise_service.get_log(user_id, start, end, limit)
        return _log_payload(log)

    return app


def _request_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if not field:
        return f"Invalid request: {first.get('msg', 'malformed body')}."
    return f"Invalid request field {field}: {first.get('msg', 'invalid value')}."


def _user_payload(user: UserRecord) -> dict[str, object]:
    return {"username": user.username, "_id": user.id}


def _added_exercise_payload(added: AddedExercise) -> dict[str, object]:
    return {
        "_id": added.user.id,
        "username": added.user.username,
        "description": added.exercise.description,
        "duration": added.exercise.duration,
        "date": added.exercise.display_date,
    }


def _log_payload(log: ExerciseLog) -> dict[str, object]:
    return {
        "_id": log.user.id,
        "username": log.user.username,
        "count": log.count,
        "log": [
            {
                "description": exercise.description,
                "duration": exercise.duration,
                "date": exercise.display_date,
            }
            for exercise in log.exercises
        ],
    }
