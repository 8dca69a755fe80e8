# models/attendance.py

from datetime import date
from typing import Optional, Tuple
from pydantic import BaseModel, Field, model_validator

from .enums import ServiceType


COUNT_FIELDS = (
    "men_count",
    "women_count",
    "youth_count",
    "children_count",
    "guests_count",
)


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class AttendanceBase(BaseModel):
    """
    Two shapes share the attendance table:
      • per-member:  member_id + present
      • aggregate:   total_count + category sub-counts for one service
    """
    service_date: date
    service_type: ServiceType

    member_id: Optional[str] = None
    present: Optional[bool] = None

    total_count: Optional[int] = Field(None, ge=0)
    men_count: Optional[int] = Field(None, ge=0)
    women_count: Optional[int] = Field(None, ge=0)
    youth_count: Optional[int] = Field(None, ge=0)
    children_count: Optional[int] = Field(None, ge=0)
    guests_count: Optional[int] = Field(None, ge=0)

    notes: Optional[str] = None

    @property
    def is_aggregate(self) -> bool:
        return self.member_id is None

    def composite_key(self) -> Tuple:
        """(date, service) for aggregate counts, (member, date, service) otherwise."""
        if self.is_aggregate:
            return (self.service_date, self.service_type)
        return (self.member_id, self.service_date, self.service_type)

    def counted_total(self) -> int:
        return sum(getattr(self, f) or 0 for f in COUNT_FIELDS)


# -------------------------------------------------
# Create
# -------------------------------------------------
class AttendanceCreate(AttendanceBase):

    @model_validator(mode="after")
    def check_shape(self):
        if self.member_id is None and self.total_count is None:
            raise ValueError("Either member_id or total_count is required")
        if self.member_id is not None and self.present is None:
            self.present = True
        return self


# -------------------------------------------------
# Read
# -------------------------------------------------
class AttendanceRead(AttendanceBase):
    id: str
