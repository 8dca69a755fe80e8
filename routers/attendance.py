# routers/attendance.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.permissions import ATTENDANCE
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission, requires_write_role
from models.attendance import AttendanceCreate, AttendanceRead
from models.enums import ServiceType
from services.reports import attendance_summary, month_key


router = APIRouter(
    prefix="/attendance",
    tags=["Attendance"],
)


@router.get(
    "",
    summary="List attendance records",
    dependencies=[Depends(requires_permission(ATTENDANCE))],
)
async def list_attendance(
    service_date: Optional[date] = None,
    service_type: Optional[ServiceType] = None,
    state: ChurchState = Depends(get_church_state),
):
    records = state.attendance
    if service_date:
        records = [r for r in records if r.service_date == service_date]
    if service_type:
        records = [r for r in records if r.service_type == service_type]
    return {"success": True, "data": records}


@router.get(
    "/summary",
    summary="Monthly attendance total and average",
    dependencies=[Depends(requires_permission(ATTENDANCE))],
)
async def get_attendance_summary(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM, defaults to current month"),
    state: ChurchState = Depends(get_church_state),
):
    return attendance_summary(state.attendance, month or month_key(date.today()))


@router.post(
    "",
    response_model=AttendanceRead,
    status_code=201,
    summary="Record attendance",
    description="""
    Records one attendance entry.

    **Rejected locally (no database call):**
    - 409 when the same date + service (or member + date + service) is already loaded
    - 422 when men + women + youth + children + guests ≠ total
    """,
    dependencies=[Depends(requires_permission(ATTENDANCE)), Depends(requires_write_role())],
)
async def record_attendance(payload: AttendanceCreate, state: ChurchState = Depends(get_church_state)):
    return await state.record_attendance(payload)
