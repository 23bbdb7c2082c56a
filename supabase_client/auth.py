# supabase_client/auth.py
"""
Session / identity access on top of Supabase Auth.

The app never implements authentication itself: it asks Supabase for the
current session and user, signs in and out, and listens for session
changes (sign-in, sign-out, token refresh) so derived state can be rebuilt.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from supabase import Client

from core.log_config import get_logger

log = get_logger(__name__)

SessionCallback = Callable[[str, Optional[Any]], None]


class SessionProvider:
    """Wraps `client.auth` with the handful of calls the app needs."""

    def __init__(self, client: Client):
        self.client = client

    def get_session(self) -> Optional[Any]:
        """Return the current session, or None when signed out."""
        return self.client.auth.get_session()

    def get_user_id(self) -> Optional[str]:
        """Return the signed-in user's id, or None."""
        response = self.client.auth.get_user()
        user = getattr(response, "user", None)
        return user.id if user else None

    def sign_in(self, email: str, password: str) -> Optional[Any]:
        log.info("Signing in")
        response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        return response.session

    def sign_out(self) -> None:
        log.info("Signing out")
        self.client.auth.sign_out()

    def subscribe(self, callback: SessionCallback) -> Callable[[], None]:
        """
        Register `callback(event, session)` for auth state changes.

        Returns
        -------
        callable
            Call it to stop receiving notifications.
        """
        subscription = self.client.auth.on_auth_state_change(callback)
        return subscription.unsubscribe
