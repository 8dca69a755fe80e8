# services/members.py

from models.member import MemberCreate, MemberRead, MemberUpdate
from services.base import EntityService


class MembersService(EntityService[MemberRead]):
    table = "members"
    order_column = "created_at"
    read_model = MemberRead

    def from_row(self, row: dict) -> MemberRead:
        row = dict(row)
        # Legacy rows may predate member numbers
        row["member_number"] = row.get("member_number") or 0
        return super().from_row(row)

    async def create(self, fields: MemberCreate) -> MemberRead:
        return await self._insert(self.to_row(fields))

    async def update(self, member_id: str, fields: MemberUpdate) -> MemberRead:
        return await self._update(member_id, self.to_row(fields, partial=True))

    async def delete(self, member_id: str) -> None:
        await self._delete(member_id)
