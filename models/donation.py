# models/donation.py

import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import DonationCategory, PaymentMethod


class DonationBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    member_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: DonationCategory = DonationCategory.tithe
    date: dt.date
    method: PaymentMethod = PaymentMethod.cash
    notes: Optional[str] = None


class DonationCreate(DonationBase):
    """
    receipt_sent is not accepted from callers; new donations always
    start as "receipt not sent".
    """
    pass


class DonationRead(DonationBase):
    id: str
    receipt_sent: bool = False
