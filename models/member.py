# models/member.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Department, BaptismStatus, MemberStatus


# -------------------------------------------------
# Shared fields
# -------------------------------------------------
class MemberBase(BaseModel):
    # Required text must survive stripping; blanks are rejected, never stored as NULL
    model_config = ConfigDict(str_strip_whitespace=True)

    member_number: int = Field(0, ge=0)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    department: Department
    baptism_status: BaptismStatus
    status: MemberStatus = MemberStatus.active
    join_date: date
    birth_date: date
    address: str = Field(..., min_length=1)
    photo: Optional[str] = None

    # Empty photo string means "no photo"
    @field_validator("photo", mode="before")
    def blank_photo_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# -------------------------------------------------
# Create
# -------------------------------------------------
class MemberCreate(MemberBase):
    """
    No ID supplied; Supabase generates the UUID.
    """
    pass


# -------------------------------------------------
# Read (Supabase → application)
# -------------------------------------------------
class MemberRead(MemberBase):
    id: str


# -------------------------------------------------
# Update (PATCH)
# -------------------------------------------------
class MemberUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    member_number: Optional[int] = Field(None, ge=0)
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    department: Optional[Department] = None
    baptism_status: Optional[BaptismStatus] = None
    status: Optional[MemberStatus] = None
    join_date: Optional[date] = None
    birth_date: Optional[date] = None
    address: Optional[str] = Field(None, min_length=1)
    photo: Optional[str] = None

    # PATCH may omit a required column but never clear it
    @field_validator(
        "member_number", "name", "phone", "email", "department",
        "baptism_status", "status", "join_date", "birth_date", "address",
    )
    def required_column_not_cleared(cls, v):
        if v is None:
            raise ValueError("cannot be cleared")
        return v
