"""Supabase Auth adapter for storage sessions."""

from dataclasses import dataclass

from supabase import Client

from exercise_tracker.domain.auth import AuthSession
from exercise_tracker.services.auth import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Supabase implementation of the session identity provider."""

    client: Client

    def sign_in_anonymously(self) -> AuthSession:
        """Start an anonymous Supabase session."""
        response = self.client.auth.sign_in_anonymously()
        return _to_session(response, anonymous=True)

    def sign_in_with_token(self, access_token: str, refresh_token: str) -> AuthSession:
        """Resume a Supabase session from issued tokens."""
        response = self.client.auth.set_session(access_token, refresh_token)
        return _to_session(response, anonymous=False)


def _to_session(response: object, *, anonymous: bool) -> AuthSession:
    user = getattr(response, "user", None)
    user_id = getattr(user, "id", None)
    if not user_id:
        raise RuntimeError("Supabase auth returned no user")
    return AuthSession(
        user_id=str(user_id),
        anonymous=bool(getattr(user, "is_anonymous", anonymous)),
    )
