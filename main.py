from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from supabase import AsyncClient

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup, validate_required_config
from core.errors import ChurchAdminError
from core.local_storage import LocalStorage
from core.logging_config import logger
from core.roles import RoleResolver
from core.scheduler import ReceiptScheduler
from core.session import SessionManager
from core.state import ChurchState, EntityServices
from core.supabase_client import get_admin_client, get_supabase_client
from services.users import UserAdminService

# Routers
from routers import ALL_ROUTERS


# -------------------------------------------------
# Application state wiring
# -------------------------------------------------
def wire_app_state(
    app: FastAPI,
    client: Optional[AsyncClient],
    admin_client: Optional[AsyncClient] = None,
    storage: Optional[LocalStorage] = None,
    receipts: Optional[ReceiptScheduler] = None,
) -> None:
    """
    Builds the session, role resolver, entity state and user admin
    service around the given clients and stores them on ``app.state``.
    A missing client leaves the dependent objects unset; routes that
    need them answer 503.
    """
    storage = storage or LocalStorage()
    app.state.storage = storage
    app.state.supabase = client
    app.state.session = None
    app.state.role_resolver = None
    app.state.church = None
    app.state.user_admin = UserAdminService(admin_client) if admin_client is not None else None

    if client is None:
        logger.error("Supabase client not configured; data routes are disabled")
        return

    resolver = RoleResolver(client)
    session = SessionManager(client, resolver, storage)
    church = ChurchState(client, EntityServices.for_client(client), receipts or ReceiptScheduler())
    session.subscribe(church.on_session_event)

    app.state.role_resolver = resolver
    app.state.session = session
    app.state.church = church


# -------------------------------------------------
# Lifespan (startup / shutdown)
# -------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting Church Admin API")

    if settings.ENV == "production":
        validate_config_on_startup()
    else:
        for name in validate_required_config():
            logger.warning(f"Missing environment variable: {name}")

    storage = LocalStorage()
    client = await get_supabase_client(storage)
    admin_client = await get_admin_client()
    wire_app_state(app, client, admin_client, storage)

    session: Optional[SessionManager] = app.state.session
    church: Optional[ChurchState] = app.state.church

    if session is not None:
        church.receipts.start()
        session.attach()
        await session.initialize()

        # initialize() already loads on SIGNED_IN; an anonymous start loads on request
        if settings.LOAD_DATA_ON_STARTUP and session.authenticated and not church.loaded:
            try:
                await church.load_all()
            except ChurchAdminError as e:
                logger.error(f"Initial data load failed: {e.message}")

    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        logger.info(f"➡️ {methods:10s} {route.path}")

    yield

    if session is not None:
        session.detach()
        church.receipts.shutdown()
    logger.info("Church Admin API stopped")


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Church administration API on Supabase",
        lifespan=lifespan,
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(ChurchAdminError)
    async def handle_domain_error(request: Request, exc: ChurchAdminError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} at {request.url}: {exc.message}")
        elif exc.status_code in (401, 403):
            logger.warning(f"HTTP {exc.status_code} at {request.url}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_detail())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    for router in ALL_ROUTERS:
        app.include_router(router)

    return app


# Create the global FastAPI instance
app = create_app()
