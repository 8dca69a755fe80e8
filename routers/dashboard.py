# routers/dashboard.py

from datetime import date

from fastapi import APIRouter, Depends

from core.permissions import DASHBOARD
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission
from models.enums import (
    BaptismStatus,
    Department,
    DonationCategory,
    EquipmentCondition,
    FollowUpStatus,
    MemberStatus,
    PaymentMethod,
    ServiceType,
    TemplateType,
)
from services.reports import dashboard_summary, upcoming_birthdays


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(requires_permission(DASHBOARD))],
)


# ============================================================
# SUMMARY CARDS
# ============================================================
@router.get("", summary="Dashboard totals")
async def get_dashboard(state: ChurchState = Depends(get_church_state)):
    """
    Member counts, giving this month, attendance totals and the
    birthdays coming up in the next week. Computed from loaded data.
    """
    return dashboard_summary(state.members, state.donations, state.attendance, date.today())


@router.get("/birthdays", summary="Upcoming birthdays")
async def get_birthdays(state: ChurchState = Depends(get_church_state)):
    members = upcoming_birthdays(state.members, date.today())
    return {"success": True, "data": members}


# ============================================================
# FORM OPTIONS (dropdown values)
# ============================================================
@router.get("/options", summary="Allowed values for form dropdowns")
async def get_options():
    return {
        "departments": Department.list(),
        "baptism_statuses": BaptismStatus.list(),
        "member_statuses": MemberStatus.list(),
        "service_types": ServiceType.list(),
        "donation_categories": DonationCategory.list(),
        "payment_methods": PaymentMethod.list(),
        "follow_up_statuses": FollowUpStatus.list(),
        "equipment_conditions": EquipmentCondition.list(),
        "template_types": TemplateType.list(),
    }
