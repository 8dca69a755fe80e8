# services/equipment.py

from models.equipment import EquipmentCreate, EquipmentRead, EquipmentUpdate
from services.base import EntityService


class EquipmentService(EntityService[EquipmentRead]):
    table = "equipment"
    order_column = "created_at"
    read_model = EquipmentRead

    async def create(self, fields: EquipmentCreate) -> EquipmentRead:
        return await self._insert(self.to_row(fields))

    async def update(self, equipment_id: str, fields: EquipmentUpdate) -> EquipmentRead:
        return await self._update(equipment_id, self.to_row(fields, partial=True))

    async def delete(self, equipment_id: str) -> None:
        await self._delete(equipment_id)
