# services/visitors.py

from models.enums import FollowUpStatus
from models.visitor import VisitorCreate, VisitorRead
from services.base import EntityService


class VisitorsService(EntityService[VisitorRead]):
    table = "visitors"
    order_column = "visit_date"
    read_model = VisitorRead

    async def create(self, fields: VisitorCreate) -> VisitorRead:
        return await self._insert(self.to_row(fields))

    async def update_follow_up(self, visitor_id: str, status: FollowUpStatus) -> VisitorRead:
        return await self._update(visitor_id, {"follow_up_status": FollowUpStatus(status).value})
