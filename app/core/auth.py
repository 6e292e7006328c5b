# app/core/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, Request, Response, status
from jose import jwt, JWTError

from app.core.config import get_settings
from app.core.constants import Collections
from app.core.errors import LoginRedirect
from app.database import DocumentStore, get_store
from app.models.user import UserRecord

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"
SESSION_ALG = "HS256"


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (the client's identity token).

    Verification:
      - signature (SUPABASE_JWT_ALG using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Args:
        token: raw JWT obtained by the client at sign-in.

    Returns:
        Decoded JWT claims.

    Raises:
        HTTPException(401): if token is invalid/expired or lacks sub/email.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if not claims.get("sub") or not claims.get("email"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )
    return claims


def create_session_cookie(claims: dict[str, Any], now: datetime | None = None) -> str:
    """
    Issue the admin session cookie value from verified identity claims.

    The cookie is a JWT signed with SESSION_SECRET, carrying the user id
    and email, valid for SESSION_MAX_AGE_DAYS.
    """
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": claims["sub"],
        "email": claims["email"],
        "typ": SESSION_TOKEN_TYPE,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=settings.session_max_age_seconds)).timestamp()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=SESSION_ALG)


def verify_session_cookie(value: str | None) -> dict[str, Any] | None:
    """
    Return the session claims, or None if the cookie is missing,
    tampered with, expired, or not a session token.
    """
    if not value:
        return None

    settings = get_settings()
    try:
        claims = jwt.decode(value, settings.session_secret, algorithms=[SESSION_ALG])
    except JWTError as exc:
        logger.info("Rejected session cookie: %s", exc)
        return None

    if claims.get("typ") != SESSION_TOKEN_TYPE or not claims.get("sub"):
        logger.info("Rejected session cookie: not a session token")
        return None
    return claims


def set_session_cookie(response: Response, value: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=value,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        path="/",
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def get_session_claims(request: Request) -> dict[str, Any] | None:
    """
    Resolve the admin session from its cookie.

    Returns:
        Session claims if the cookie is valid, else None (anonymous).
    """
    return verify_session_cookie(request.cookies.get(get_settings().SESSION_COOKIE_NAME))


def get_user_role(store: DocumentStore, user_id: str) -> str | None:
    """Role stored on the user's record, or None if there is no record."""
    record = store.get_document(Collections.USERS, user_id)
    if record is None:
        return None
    return record.role


def get_or_create_user(
    store: DocumentStore,
    user_id: str,
    email: str,
) -> UserRecord:
    """
    Return the user's record, creating it on first sign-in.

    New records get DEFAULT_USER_ROLE ("user" unless configured);
    admins must be promoted explicitly.
    """
    record = store.get_document(Collections.USERS, user_id)
    if record is None:
        record = store.create_document(
            Collections.USERS,
            {"email": email, "role": get_settings().DEFAULT_USER_ROLE},
            doc_id=user_id,
        )
        logger.info("Created user record %s with role %s", user_id, record.role)
    return record


def require_admin(
    claims: dict[str, Any] | None = Depends(get_session_claims),
    store: DocumentStore = Depends(get_store),
) -> dict[str, Any]:
    """
    Gate for every admin route.

    - No valid session cookie => redirect to the login route.
    - Session present but the user's role is missing or not "admin" =>
      redirect to the login route and clear the session cookie.

    Returns:
        The session claims of the admin.

    Raises:
        LoginRedirect: handled in app.main.
    """
    if claims is None:
        raise LoginRedirect()

    role = get_user_role(store, claims["sub"])
    if role != "admin":
        logger.info("Denied admin access to %s (role=%s)", claims["sub"], role)
        raise LoginRedirect(clear_session=True)
    return claims
