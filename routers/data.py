# routers/data.py

from fastapi import APIRouter, Depends

from core.state import ChurchState
from dependencies.auth import get_church_state, get_current_session


router = APIRouter(
    prefix="/data",
    tags=["Data"],
    dependencies=[Depends(get_current_session)],
)


@router.get("/status", summary="Load state of the in-memory collections")
async def data_status(state: ChurchState = Depends(get_church_state)):
    return state.status()


# ============================================================
# RELOAD (all six collections, all-or-nothing)
# ============================================================
@router.post("/reload", summary="Reload every collection from Supabase")
async def reload_data(state: ChurchState = Depends(get_church_state)):
    await state.load_all()
    return state.status()
