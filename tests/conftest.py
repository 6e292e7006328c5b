import os

# Settings are read once and cached; they must be in place before app imports.
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

import time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402

from app.core.auth import create_session_cookie  # noqa: E402
from app.core.config import get_settings  # noqa: E402
from app.core.constants import Collections  # noqa: E402
from app.core.storage import ObjectStorage, get_storage  # noqa: E402
from app.database import DocumentStore, get_store  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import FakeSupabase, TickingClock  # noqa: E402

ADMIN_ID = "admin-uid"
ADMIN_EMAIL = "landlord@example.com"
USER_ID = "regular-uid"
USER_EMAIL = "regular@example.com"


def make_access_token(sub: str, email: str, expires_in: int = 3600) -> str:
    """Identity token as Supabase Auth would issue it."""
    now = int(time.time())
    return jwt.encode(
        {"sub": sub, "email": email, "aud": "authenticated", "iat": now, "exp": now + expires_in},
        get_settings().SUPABASE_JWT_SECRET,
        algorithm="HS256",
    )


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(fake_supabase, clock):
    return DocumentStore(fake_supabase, clock=clock)


@pytest.fixture
def storage(fake_supabase):
    return ObjectStorage(fake_supabase, get_settings().STORAGE_BUCKET)


@pytest.fixture
def client(store, storage):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_record(store):
    return store.create_document(
        Collections.USERS,
        {"email": ADMIN_EMAIL, "role": "admin"},
        doc_id=ADMIN_ID,
    )


@pytest.fixture
def admin_client(client, admin_record):
    """Test client carrying a valid admin session cookie."""
    cookie = create_session_cookie({"sub": ADMIN_ID, "email": ADMIN_EMAIL})
    client.cookies.set(get_settings().SESSION_COOKIE_NAME, cookie)
    return client
