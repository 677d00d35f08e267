"""Pydantic models for API request bodies."""

from pydantic import BaseModel


class CreateUserRequest(BaseModel):
    """Body of a create-user request."""

    username: str | None = None


class AddExerciseRequest(BaseModel):
    """Body of an add-exercise request.

    Duration stays loosely typed so that malformed values reach domain
    validation instead of failing request parsing.
    """

    description: str | None = None
    duration: int | float | str | None = None
    date: str | None = None
