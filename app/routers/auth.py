# app/routers/auth.py
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from app.core.auth import (
    clear_session_cookie,
    create_session_cookie,
    decode_access_token,
    get_session_claims,
    get_user_role,
    set_session_cookie,
)
from app.database import DocumentStore, get_store
from app.schemas.user import AdminCheck, AuthStatus, SessionCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/session", response_model=AuthStatus)
def create_session(response: Response, payload: SessionCreate | None = None):
    """
    Exchange a Supabase access token for the admin session cookie.

    - 400 if the token is missing.
    - 500 if the token cannot be verified.
    """
    id_token = (payload.id_token or "").strip() if payload else ""
    if not id_token:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "ID token is required"},
        )

    try:
        claims = decode_access_token(id_token)
    except HTTPException as exc:
        logger.error("Session creation failed: %s", exc.detail)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    set_session_cookie(response, create_session_cookie(claims))
    logger.info("Session created for %s", claims["sub"])
    return AuthStatus(status="success")


@router.delete("/session", response_model=AuthStatus)
def delete_session(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return AuthStatus(status="success")


@router.post("/logout", response_model=AuthStatus)
def logout(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return AuthStatus(status="success")


@router.get("/check-admin", response_model=AdminCheck)
def check_admin(
    claims: dict[str, Any] | None = Depends(get_session_claims),
    store: DocumentStore = Depends(get_store),
):
    """
    Whether the session cookie belongs to an admin.
    """
    if claims is None:
        return AdminCheck(is_admin=False)
    return AdminCheck(is_admin=get_user_role(store, claims["sub"]) == "admin")
