# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.core.auth import clear_session_cookie
from app.core.config import get_settings
from app.core.errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentValidationError,
    LoginRedirect,
    StoreError,
)

# Routers
from app.routers.auth import router as auth_router
from app.routers.menu import router as menu_router, admin_router as admin_menu_router
from app.routers.events import router as events_router, admin_router as admin_events_router
from app.routers.gallery import router as gallery_router, admin_router as admin_gallery_router
from app.routers.bookings import router as bookings_router, admin_router as admin_bookings_router
from app.routers.sections import router as sections_router, admin_router as admin_sections_router
from app.routers.uploads import router as uploads_router
from app.routers.users import router as users_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Report which Supabase project is in use.
      - Warn when admin writes cannot work (no service-role key).

    Shutdown:
      - No special cleanup needed; clients are created lazily.
    """
    logger.info("🔄 Startup: using Supabase project %s", settings.SUPABASE_URL)
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.warning("⚠️ Startup: SUPABASE_SERVICE_ROLE_KEY is not set; data access will fail.")
    else:
        logger.info("✅ Startup: configuration OK.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Pub Site API",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Admin page gate ---
@app.middleware("http")
async def admin_gate(request: Request, call_next):
    """
    Send /admin/* page requests without a session cookie to the login page.

    Presence only; the role is checked by `require_admin` on the API.
    """
    path = request.url.path
    is_admin_page = path == "/admin" or path.startswith("/admin/")
    if (
        is_admin_page
        and path.rstrip("/") != settings.LOGIN_PATH.rstrip("/")
        and not request.cookies.get(settings.SESSION_COOKIE_NAME)
    ):
        return RedirectResponse(settings.LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    return await call_next(request)


# --- Error mapping ---
@app.exception_handler(LoginRedirect)
async def login_redirect_handler(request: Request, exc: LoginRedirect):
    response = RedirectResponse(settings.LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    if exc.clear_session:
        clear_session_cookie(response)
    return response


@app.exception_handler(DocumentNotFoundError)
async def not_found_handler(request: Request, exc: DocumentNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(DocumentExistsError)
async def exists_handler(request: Request, exc: DocumentExistsError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(DocumentValidationError)
async def validation_handler(request: Request, exc: DocumentValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors or exc.message},
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("❌ Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Data store unavailable, please try again."},
    )


# API prefix, e.g. /api
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(menu_router, prefix=settings.API_PREFIX)
app.include_router(events_router, prefix=settings.API_PREFIX)
app.include_router(gallery_router, prefix=settings.API_PREFIX)
app.include_router(bookings_router, prefix=settings.API_PREFIX)
app.include_router(sections_router, prefix=settings.API_PREFIX)

app.include_router(admin_menu_router, prefix=settings.API_PREFIX)
app.include_router(admin_events_router, prefix=settings.API_PREFIX)
app.include_router(admin_gallery_router, prefix=settings.API_PREFIX)
app.include_router(admin_bookings_router, prefix=settings.API_PREFIX)
app.include_router(admin_sections_router, prefix=settings.API_PREFIX)
app.include_router(uploads_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "pub-site-backend"}
