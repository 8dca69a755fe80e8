# models/equipment.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import EquipmentCondition


class EquipmentBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    condition: EquipmentCondition = EquipmentCondition.good
    purchase_date: date
    value: float = Field(..., ge=0)
    location: str = Field(..., min_length=1)
    notes: Optional[str] = None


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentRead(EquipmentBase):
    id: str


class EquipmentUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    condition: Optional[EquipmentCondition] = None
    purchase_date: Optional[date] = None
    value: Optional[float] = Field(None, ge=0)
    location: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None

    @field_validator("name", "category", "condition", "purchase_date", "value", "location")
    def required_column_not_cleared(cls, v):
        if v is None:
            raise ValueError("cannot be cleared")
        return v
