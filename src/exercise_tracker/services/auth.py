"""Storage session bootstrap."""

import logging
from dataclasses import dataclass
from typing import Protocol

from exercise_tracker.domain.auth import AuthSession
from exercise_tracker.services.retry import RetryPolicy

_logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Identity provider used to authenticate the storage session."""

    def sign_in_anonymously(self) -> AuthSession:
        """Start an anonymous session."""

    def sign_in_with_token(self, access_token: str, refresh_token: str) -> AuthSession:
        """Resume a session from issued tokens."""


@dataclass
class SessionBootstrap:
    """Authenticates the storage client when the application starts."""

    client: AuthClient
    retry: RetryPolicy
    access_token: str | None = None
    refresh_token: str | None = None

    def authenticate(self) -> AuthSession:
        """Sign in with the configured tokens, or anonymously without them."""
        access_token = self.access_token
        refresh_token = self.refresh_token
        if access_token and refresh_token:
            session = self.retry.call(
                lambda: self.client.sign_in_with_token(access_token, refresh_token),
                action="sign_in_with_token",
            )
        else:
            session = self.retry.call(
                self.client.sign_in_anonymously, action="sign_in_anonymously"
            )
        _logger.info(
            "Authenticated storage session uid=%s anonymous=%s",
            session.user_id,
            session.anonymous,
        )
        return session
