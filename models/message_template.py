# models/message_template.py

from pydantic import BaseModel, ConfigDict, Field

from .enums import TemplateType


class MessageTemplateBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    type: TemplateType = TemplateType.sms


class MessageTemplateCreate(MessageTemplateBase):
    pass


class MessageTemplateRead(MessageTemplateBase):
    id: str
