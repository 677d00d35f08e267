"""Domain models for storage sessions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """Identity the storage client is authenticated as."""

    user_id: str
    anonymous: bool
