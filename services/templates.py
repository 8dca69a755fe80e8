# services/templates.py

from models.message_template import MessageTemplateCreate, MessageTemplateRead
from services.base import EntityService


class TemplatesService(EntityService[MessageTemplateRead]):
    table = "message_templates"
    order_column = "created_at"
    read_model = MessageTemplateRead

    async def create(self, fields: MessageTemplateCreate) -> MessageTemplateRead:
        return await self._insert(self.to_row(fields))

    async def delete(self, template_id: str) -> None:
        await self._delete(template_id)
