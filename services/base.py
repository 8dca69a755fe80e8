# services/base.py

from typing import Generic, List, Type, TypeVar

from pydantic import BaseModel, ValidationError
from supabase import AsyncClient

from core.errors import (
    RecordNotFoundError,
    RemoteQueryError,
    RemoteWriteError,
    extract_supabase_error,
)
from core.logging_config import logger
from core.utils import sanitize


ReadModel = TypeVar("ReadModel", bound=BaseModel)


class EntityService(Generic[ReadModel]):
    """
    Shared plumbing for one Supabase table.

    Subclasses set ``table``, ``order_column`` and ``read_model`` and
    expose only the operations their entity supports; the underscored
    helpers here do the remote call and the row → record conversion.
    """

    table: str
    order_column: str = "created_at"
    read_model: Type[ReadModel]

    def __init__(self, client: AsyncClient):
        self.client = client

    # ---------------------------------------------
    # Shape conversion
    # ---------------------------------------------
    def to_row(self, fields: BaseModel, *, partial: bool = False) -> dict:
        """Application fields → row. ``partial`` keeps only fields the caller set."""
        return sanitize(fields.model_dump(mode="json", exclude_unset=partial))

    def from_row(self, row: dict) -> ReadModel:
        data = dict(row)
        data["id"] = str(data["id"])
        return self.read_model.model_validate(data)

    def _written(self, row: dict) -> ReadModel:
        # The write landed; a row that cannot be read back is still a write failure
        try:
            return self.from_row(row)
        except ValidationError as e:
            logger.error(f"Malformed {self.table} row after write: {e}")
            raise RemoteWriteError(f"{self.table} record was written but could not be read back", cause=e)

    # ---------------------------------------------
    # Remote operations
    # ---------------------------------------------
    async def get_all(self) -> List[ReadModel]:
        try:
            result = await (
                self.client.table(self.table)
                .select("*")
                .order(self.order_column, desc=True)
                .execute()
            )
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Error fetching {self.table}: {detail}")
            raise RemoteQueryError(f"Failed to fetch {self.table}: {detail}", cause=e)

        try:
            return [self.from_row(row) for row in result.data or []]
        except ValidationError as e:
            logger.error(f"Malformed {self.table} row: {e}")
            raise RemoteQueryError(f"Failed to read {self.table}: malformed row", cause=e)

    async def _insert(self, row: dict) -> ReadModel:
        try:
            result = await self.client.table(self.table).insert(row).execute()
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Error creating {self.table} row: {detail}")
            raise RemoteWriteError(f"Failed to create {self.table} record: {detail}", cause=e)

        if not result.data:
            raise RemoteWriteError(f"Insert into {self.table} returned no data")

        return self._written(result.data[0])

    async def _update(self, record_id: str, row: dict) -> ReadModel:
        try:
            result = await (
                self.client.table(self.table)
                .update(row)
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Error updating {self.table} {record_id}: {detail}")
            raise RemoteWriteError(f"Failed to update {self.table} record: {detail}", cause=e)

        if not result.data:
            raise RecordNotFoundError(f"{self.table} record '{record_id}' not found")

        return self._written(result.data[0])

    async def _delete(self, record_id: str) -> None:
        # Deleting a missing id is a no-op on the store side
        try:
            await self.client.table(self.table).delete().eq("id", record_id).execute()
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"Error deleting {self.table} {record_id}: {detail}")
            raise RemoteWriteError(f"Failed to delete {self.table} record: {detail}", cause=e)
