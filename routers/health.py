# routers/health.py

from fastapi import APIRouter, Request

from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)

DB_HEALTH_CACHE_KEY = "health:db"
DB_HEALTH_TTL_SECONDS = 30


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + table queries
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
async def health_db(request: Request):
    """
    Queries each entity table once and reports per-table status.
    Results are cached for a short time in local storage.

    Safe for external health monitors (no auth required).
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is not None:
        cached = storage.cache.get(DB_HEALTH_CACHE_KEY)
        if cached is not None:
            return cached

    status = await ping_supabase(getattr(request.app.state, "supabase", None))

    if storage is not None and status["status"] == "ok":
        storage.cache.set(DB_HEALTH_CACHE_KEY, status, ttl_seconds=DB_HEALTH_TTL_SECONDS)
    return status


# -----------------------------------------------------
# GET /health/app
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check for uptime monitors.
    """
    return {
        "service": "Church Admin API",
        "status": "ok",
    }
