# app/core/session.py
"""
Client-side admin session.

`AuthSession` is the single object that owns the sign-in state of one
admin client. It is created explicitly and handed to whatever needs it;
nothing in this module keeps a module-level instance.

States:

    unauthenticated -> authenticating -> authenticated(role) -> unauthenticated

Subscribers are called with a `SessionSnapshot` on every transition.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
from supabase import AuthApiError, AuthError

from app.core.auth import get_or_create_user
from app.core.errors import AccessLayerError
from app.core.supabase_client import supabase_public
from app.database import DocumentStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
UNEXPECTED_ERROR_MESSAGE = "An error occurred. Please try again."


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState = SessionState.UNAUTHENTICATED
    user_id: str | None = None
    email: str | None = None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.state is SessionState.AUTHENTICATED and self.role == "admin"


SIGNED_OUT = SessionSnapshot()


class InvalidCredentialsError(Exception):
    """The identity provider rejected the email/password pair."""


class AuthFlowError(Exception):
    """Any other failure while signing in."""


class AdminAccessDenied(Exception):
    """Signed in, but the user is not an admin; the session was torn down."""


Listener = Callable[[SessionSnapshot], None]


class AuthSession:
    """
    Sign-in state machine for the admin back office.

    Collaborators (all injected):
      - auth: Supabase Auth client (`client.auth`)
      - http: HTTP client pointed at this API, used for the session endpoint
      - store: document access layer, for the user record / role lookup
    """

    def __init__(
        self,
        auth: Any,
        http: httpx.Client,
        store: DocumentStore,
        session_path: str = "/api/auth/session",
    ):
        self.auth = auth
        self.http = http
        self.store = store
        self.session_path = session_path
        self._snapshot = SIGNED_OUT
        self._listeners: list[Listener] = []
        self._provider_subscription: Any = None

    # ----- Subscription -----

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener; returns the matching unsubscribe function.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, snapshot: SessionSnapshot) -> None:
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def listen_to_provider(self) -> None:
        """
        Follow the identity provider's own auth events, so a sign-out or
        expiry that happens outside this object is reflected here.
        """
        if self._provider_subscription is None:
            self._provider_subscription = self.auth.on_auth_state_change(
                self._on_provider_event
            )

    def stop_listening(self) -> None:
        if self._provider_subscription is not None:
            self._provider_subscription.unsubscribe()
            self._provider_subscription = None

    def _on_provider_event(self, event: str, session: Any) -> None:
        if event in ("SIGNED_OUT", "USER_DELETED"):
            self._transition(SIGNED_OUT)

    # ----- Sign in / out -----

    def sign_in(self, email: str, password: str) -> SessionSnapshot:
        """
        Full admin sign-in.

        Steps:
          1. Password sign-in against Supabase Auth.
          2. Get or create the user's record (role lookup).
          3. Role check; non-admins are signed out again.
          4. Post the identity token to the session endpoint so the
             server issues the session cookie.

        Raises:
            InvalidCredentialsError: wrong email/password.
            AdminAccessDenied: valid user without the admin role.
            AuthFlowError: anything else.
        """
        self._transition(SessionSnapshot(state=SessionState.AUTHENTICATING, email=email))

        try:
            response = self.auth.sign_in_with_password({"email": email, "password": password})
        except AuthApiError as exc:
            self._transition(SIGNED_OUT)
            if exc.code == "invalid_credentials":
                raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE) from exc
            logger.error("Sign-in failed: %s", exc)
            raise AuthFlowError(UNEXPECTED_ERROR_MESSAGE) from exc
        except (AuthError, httpx.HTTPError) as exc:
            self._transition(SIGNED_OUT)
            logger.error("Sign-in failed: %s", exc)
            raise AuthFlowError(UNEXPECTED_ERROR_MESSAGE) from exc

        user, provider_session = response.user, response.session
        if user is None or provider_session is None:
            self._transition(SIGNED_OUT)
            raise AuthFlowError(UNEXPECTED_ERROR_MESSAGE)

        try:
            record = get_or_create_user(self.store, user.id, user.email or email)
        except AccessLayerError as exc:
            logger.error("User record lookup failed for %s: %s", user.id, exc)
            self.sign_out()
            raise AuthFlowError(UNEXPECTED_ERROR_MESSAGE) from exc

        if record.role != "admin":
            logger.info("Forcing sign-out of non-admin user %s", user.id)
            self.sign_out()
            raise AdminAccessDenied("Admin access required")

        try:
            self.http.post(
                self.session_path,
                json={"idToken": provider_session.access_token},
            ).raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Session cookie could not be established: %s", exc)
            self.sign_out()
            raise AuthFlowError(UNEXPECTED_ERROR_MESSAGE) from exc

        self._transition(
            SessionSnapshot(
                state=SessionState.AUTHENTICATED,
                user_id=user.id,
                email=record.email,
                role=record.role,
            )
        )
        return self._snapshot

    def sign_out(self) -> None:
        """
        Clear the provider session, then the server session cookie.

        These are two independent calls: if clearing the cookie fails the
        client is still signed out and the cookie lives until it expires.
        """
        try:
            self.auth.sign_out()
        except AuthError as exc:
            logger.warning("Identity provider sign-out failed: %s", exc)

        try:
            self.http.delete(self.session_path).raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Server session cookie not cleared: %s", exc)

        self._transition(SIGNED_OUT)


def connect_auth_session(api_base_url: str) -> AuthSession:
    """
    Build an `AuthSession` wired to the real providers.

    Uses the anon-key Supabase client (sign-in and role lookup both go
    through RLS) and an HTTP client on `api_base_url` that keeps the
    session cookie between calls. The caller owns the returned object.
    """
    client = supabase_public()
    http = httpx.Client(base_url=api_base_url)
    return AuthSession(client.auth, http, DocumentStore(client))
