# routers/donations.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.permissions import FINANCES
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission, requires_write_role
from models.donation import DonationCreate, DonationRead
from models.enums import DonationCategory
from services.reports import finance_summary, month_key


router = APIRouter(
    prefix="/donations",
    tags=["Finances"],
)


@router.get(
    "",
    summary="List donations",
    dependencies=[Depends(requires_permission(FINANCES))],
)
async def list_donations(
    category: Optional[DonationCategory] = None,
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    state: ChurchState = Depends(get_church_state),
):
    donations = state.donations
    if category:
        donations = [d for d in donations if d.category == category]
    if month:
        donations = [d for d in donations if month_key(d.date) == month]
    return {"success": True, "data": donations}


@router.get(
    "/summary",
    summary="Totals by category and top givers",
    dependencies=[Depends(requires_permission(FINANCES))],
)
async def get_finance_summary(
    category: Optional[DonationCategory] = None,
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM, defaults to current month"),
    state: ChurchState = Depends(get_church_state),
):
    return finance_summary(
        state.donations,
        state.members,
        month=month or month_key(date.today()),
        category=category,
    )


@router.post(
    "",
    response_model=DonationRead,
    status_code=201,
    summary="Record donation",
    description="New donations start with `receipt_sent = false`; a simulated receipt flips it shortly after.",
    dependencies=[Depends(requires_permission(FINANCES)), Depends(requires_write_role())],
)
async def create_donation(payload: DonationCreate, state: ChurchState = Depends(get_church_state)):
    return await state.add_donation(payload)
