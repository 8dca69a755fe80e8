# core/supabase_client.py

from typing import Optional

from supabase import AsyncClient, AsyncClientOptions, acreate_client

from core.config import settings
from core.errors import StoreConnectionError, extract_supabase_error
from core.local_storage import LocalStorage
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (anon key, session-scoped)
# ============================================================

async def get_supabase_client(storage: Optional[LocalStorage] = None) -> Optional[AsyncClient]:
    """
    Creates the async Supabase client used by the session and every
    entity service. Auth tokens are persisted into ``storage`` so a
    sign-out can wipe them locally.

    Returns None when credentials are missing.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_ANON_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   ANON KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    options = AsyncClientOptions(
        storage=storage if storage is not None else LocalStorage(),
        persist_session=True,
        auto_refresh_token=True,
    )
    return await acreate_client(supabase_url, supabase_key, options=options)


# ============================================================
# Admin Client (service role, auth.admin.*)
# ============================================================

async def get_admin_client() -> Optional[AsyncClient]:
    """
    Creates a client with the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.admin.create_user
        - writing user_roles for other users
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.warning("Supabase service role key not configured; user management disabled")
        return None

    options = AsyncClientOptions(persist_session=False, auto_refresh_token=False)
    return await acreate_client(supabase_url, supabase_key, options=options)


# ============================================================
# Connection check
# ============================================================

async def check_connection(client: Optional[AsyncClient]) -> None:
    """
    Raises StoreConnectionError when the store cannot be queried at all.
    """
    if client is None:
        raise StoreConnectionError("Supabase client not configured")

    try:
        await client.table("members").select("id").limit(1).execute()
    except Exception as e:
        detail = extract_supabase_error(e)
        logger.error(f"Database connection test failed: {detail}")
        raise StoreConnectionError(f"Database connection failed: {detail}", cause=e)


async def ping_supabase(client: Optional[AsyncClient]) -> dict:
    """
    Per-table connectivity report for health checks.
    """
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    tables = ["members", "attendance", "donations", "visitors", "equipment", "message_templates"]
    results = {}
    status = "ok"

    for t in tables:
        try:
            res = await client.table(t).select("id").limit(1).execute()
            results[t] = {"status": "ok", "rows_found": len(res.data or [])}
        except Exception as err:
            status = "degraded"
            results[t] = {"status": "error", "detail": extract_supabase_error(err)}

    return {"service": "Supabase", "status": status, "tables": results}
