# routers/equipment.py

from fastapi import APIRouter, Depends

from core.permissions import EQUIPMENT
from core.state import ChurchState
from dependencies.auth import get_church_state, requires_permission, requires_write_role
from models.equipment import EquipmentCreate, EquipmentRead, EquipmentUpdate


router = APIRouter(
    prefix="/equipment",
    tags=["Equipment"],
)

WRITE_GATES = [Depends(requires_permission(EQUIPMENT)), Depends(requires_write_role())]


@router.get(
    "",
    summary="List equipment",
    dependencies=[Depends(requires_permission(EQUIPMENT))],
)
async def list_equipment(state: ChurchState = Depends(get_church_state)):
    return {
        "success": True,
        "data": state.equipment,
        "total_value": sum(item.value for item in state.equipment),
    }


@router.post(
    "",
    response_model=EquipmentRead,
    status_code=201,
    summary="Add equipment",
    dependencies=WRITE_GATES,
)
async def create_equipment(payload: EquipmentCreate, state: ChurchState = Depends(get_church_state)):
    return await state.add_equipment(payload)


@router.put(
    "/{equipment_id}",
    response_model=EquipmentRead,
    summary="Update equipment",
    dependencies=WRITE_GATES,
)
async def update_equipment(equipment_id: str, payload: EquipmentUpdate, state: ChurchState = Depends(get_church_state)):
    return await state.update_equipment(equipment_id, payload)


@router.delete(
    "/{equipment_id}",
    summary="Delete equipment",
    dependencies=WRITE_GATES,
)
async def delete_equipment(equipment_id: str, state: ChurchState = Depends(get_church_state)):
    await state.delete_equipment(equipment_id)
    return {"success": True, "deleted_id": equipment_id}
