# services/reports.py

"""
Summaries computed from the loaded in-memory collections.

Nothing here talks to Supabase; every function is a pure view over
records the application state already holds.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from models.attendance import AttendanceRead
from models.donation import DonationRead
from models.enums import DonationCategory, MemberStatus
from models.member import MemberRead


BIRTHDAY_WINDOW_DAYS = 7
TOP_GIVERS_LIMIT = 10


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


# ============================================================
# Birthdays
# ============================================================
def _birthday_in(year: int, birth_date: date) -> date:
    try:
        return birth_date.replace(year=year)
    except ValueError:
        # Feb 29 outside a leap year
        return date(year, 2, 28)


def upcoming_birthdays(members: Sequence[MemberRead], today: date, days: int = BIRTHDAY_WINDOW_DAYS) -> List[MemberRead]:
    """Members whose next birthday falls within [today, today + days]."""
    window_end = today + timedelta(days=days)
    upcoming = []

    for member in members:
        for year in (today.year, today.year + 1):
            birthday = _birthday_in(year, member.birth_date)
            if today <= birthday <= window_end:
                upcoming.append(member)
                break

    return upcoming


# ============================================================
# Attendance
# ============================================================
def attendance_headcount(record: AttendanceRead) -> int:
    if record.is_aggregate:
        return record.total_count or 0
    return 1 if record.present else 0


def attendance_summary(records: Sequence[AttendanceRead], month: str) -> Dict[str, Any]:
    monthly = [r for r in records if month_key(r.service_date) == month]
    total = sum(attendance_headcount(r) for r in monthly)
    average = _round_half_up(total / len(monthly)) if monthly else 0

    return {
        "month": month,
        "services": len(monthly),
        "total_attendance": total,
        "average_attendance": average,
    }


# ============================================================
# Finances
# ============================================================
def finance_summary(
    donations: Sequence[DonationRead],
    members: Sequence[MemberRead],
    month: Optional[str] = None,
    category: Optional[DonationCategory] = None,
) -> Dict[str, Any]:
    filtered = [
        d for d in donations
        if (category is None or d.category == category)
        and (month is None or month_key(d.date) == month)
    ]

    by_category = {c.value: 0.0 for c in DonationCategory}
    for d in filtered:
        by_category[d.category.value] += d.amount

    # Top givers always look at the whole month, not the category filter
    month_donations = [d for d in donations if month is None or month_key(d.date) == month]
    totals: Dict[str, float] = {}
    for d in month_donations:
        totals[d.member_id] = totals.get(d.member_id, 0.0) + d.amount

    members_by_id = {m.id: m for m in members}
    top_givers = sorted(
        (
            {"member_id": member_id, "name": members_by_id[member_id].name, "total": total}
            for member_id, total in totals.items()
            if member_id in members_by_id and total > 0
        ),
        key=lambda g: g["total"],
        reverse=True,
    )[:TOP_GIVERS_LIMIT]

    return {
        "month": month,
        "category": category.value if category else None,
        "count": len(filtered),
        "total": sum(d.amount for d in filtered),
        "by_category": by_category,
        "top_givers": top_givers,
    }


# ============================================================
# Dashboard
# ============================================================
def dashboard_summary(
    members: Sequence[MemberRead],
    donations: Sequence[DonationRead],
    attendance: Sequence[AttendanceRead],
    today: date,
) -> Dict[str, Any]:
    this_month = month_key(today)
    birthdays = upcoming_birthdays(members, today)

    return {
        "total_members": len(members),
        "active_members": sum(1 for m in members if m.status == MemberStatus.active),
        "monthly_donations": sum(d.amount for d in donations if month_key(d.date) == this_month),
        "total_donations": sum(d.amount for d in donations),
        "attendance_records": len(attendance),
        "total_attendance": sum(attendance_headcount(r) for r in attendance),
        "upcoming_birthdays": [{"id": m.id, "name": m.name, "birth_date": m.birth_date} for m in birthdays],
    }
