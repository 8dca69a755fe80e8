# models/visitor.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import FollowUpStatus


class VisitorBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None
    visit_date: date
    invited_by: Optional[str] = None
    follow_up_status: FollowUpStatus = FollowUpStatus.pending
    notes: Optional[str] = None


class VisitorCreate(VisitorBase):
    pass


class VisitorRead(VisitorBase):
    id: str


class FollowUpUpdate(BaseModel):
    """The only mutation visitors support."""
    follow_up_status: FollowUpStatus
