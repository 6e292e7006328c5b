from datetime import datetime, timedelta, timezone

from app.core.auth import (
    create_session_cookie,
    get_or_create_user,
    verify_session_cookie,
)
from app.core.config import get_settings
from app.core.constants import Collections
from tests.conftest import ADMIN_EMAIL, ADMIN_ID, USER_EMAIL, USER_ID, make_access_token

COOKIE = get_settings().SESSION_COOKIE_NAME


# -------- Session cookie helpers --------


def test_session_cookie_round_trip():
    value = create_session_cookie({"sub": ADMIN_ID, "email": ADMIN_EMAIL})

    claims = verify_session_cookie(value)

    assert claims["sub"] == ADMIN_ID
    assert claims["email"] == ADMIN_EMAIL
    assert claims["exp"] - claims["iat"] == 5 * 24 * 60 * 60


def test_expired_or_tampered_cookie_is_rejected():
    old = datetime.now(timezone.utc) - timedelta(days=6)
    expired = create_session_cookie({"sub": ADMIN_ID, "email": ADMIN_EMAIL}, now=old)
    valid = create_session_cookie({"sub": ADMIN_ID, "email": ADMIN_EMAIL})

    assert verify_session_cookie(expired) is None
    assert verify_session_cookie(valid[:-2] + "xx") is None
    assert verify_session_cookie(None) is None


def test_identity_token_is_not_a_session_cookie():
    assert verify_session_cookie(make_access_token(ADMIN_ID, ADMIN_EMAIL)) is None


def test_get_or_create_user_defaults_to_user_role(store):
    record = get_or_create_user(store, USER_ID, USER_EMAIL)

    assert record.role == "user"
    assert record.id == USER_ID
    assert get_or_create_user(store, USER_ID, USER_EMAIL) == record


# -------- Session endpoints --------


def test_create_session_sets_cookie(client):
    res = client.post("/api/auth/session", json={"idToken": make_access_token(ADMIN_ID, ADMIN_EMAIL)})

    assert res.status_code == 200
    assert res.json() == {"status": "success"}
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert "Max-Age=432000" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert verify_session_cookie(res.cookies[COOKIE])["sub"] == ADMIN_ID


def test_create_session_without_token_is_400(client):
    assert client.post("/api/auth/session", json={}).status_code == 400
    assert client.post("/api/auth/session", json={"idToken": "  "}).status_code == 400
    assert client.post("/api/auth/session").status_code == 400


def test_create_session_with_bad_token_is_500(client):
    res = client.post("/api/auth/session", json={"idToken": "garbage"})

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
    assert COOKIE not in res.cookies


def test_expired_identity_token_is_rejected(client):
    token = make_access_token(ADMIN_ID, ADMIN_EMAIL, expires_in=-60)

    assert client.post("/api/auth/session", json={"idToken": token}).status_code == 500


def test_delete_session_and_logout_clear_cookie(admin_client):
    for method, path in (("DELETE", "/api/auth/session"), ("POST", "/api/auth/logout")):
        res = admin_client.request(method, path)

        assert res.status_code == 200
        assert f'{COOKIE}=""' in res.headers["set-cookie"] or "Max-Age=0" in res.headers["set-cookie"]


def test_check_admin(client, admin_record, store):
    assert client.get("/api/auth/check-admin").json() == {"isAdmin": False}

    client.cookies.set(COOKIE, create_session_cookie({"sub": ADMIN_ID, "email": ADMIN_EMAIL}))
    assert client.get("/api/auth/check-admin").json() == {"isAdmin": True}

    store.create_document(Collections.USERS, {"email": USER_EMAIL}, doc_id=USER_ID)
    client.cookies.set(COOKIE, create_session_cookie({"sub": USER_ID, "email": USER_EMAIL}))
    assert client.get("/api/auth/check-admin").json() == {"isAdmin": False}


# -------- Admin gate --------


def test_admin_api_without_cookie_redirects_to_login(client):
    res = client.get("/api/admin/bookings", follow_redirects=False)

    assert res.status_code == 303
    assert res.headers["location"] == get_settings().LOGIN_PATH
    assert res.content == b""


def test_admin_api_with_invalid_cookie_redirects(client):
    client.cookies.set(COOKIE, "forged")

    res = client.get("/api/admin/menu", follow_redirects=False)

    assert res.status_code == 303


def test_non_admin_is_redirected_and_cookie_cleared(client, store):
    store.create_document(Collections.USERS, {"email": USER_EMAIL, "role": "user"}, doc_id=USER_ID)
    client.cookies.set(COOKIE, create_session_cookie({"sub": USER_ID, "email": USER_EMAIL}))

    res = client.get("/api/admin/bookings", follow_redirects=False)

    assert res.status_code == 303
    assert res.headers["location"] == get_settings().LOGIN_PATH
    set_cookie = res.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "Max-Age=0" in set_cookie


def test_session_without_user_record_is_redirected(client):
    client.cookies.set(COOKIE, create_session_cookie({"sub": "stranger", "email": "x@example.com"}))

    res = client.get("/api/admin/users", follow_redirects=False)

    assert res.status_code == 303
    assert "Max-Age=0" in res.headers["set-cookie"]


def test_admin_passes_gate(admin_client):
    res = admin_client.get("/api/admin/bookings")

    assert res.status_code == 200
    assert res.json() == []


def test_admin_page_gate_checks_cookie_presence(client):
    res = client.get("/admin/bookings", follow_redirects=False)
    assert res.status_code == 303
    assert res.headers["location"] == "/admin/login"

    # The login page itself is reachable (404 here, no page is served)
    assert client.get("/admin/login", follow_redirects=False).status_code == 404

    client.cookies.set(COOKIE, "anything")
    assert client.get("/admin/bookings", follow_redirects=False).status_code == 404


def test_health_check(client):
    assert client.get("/").json()["status"] == "ok"
