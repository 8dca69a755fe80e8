# services/attendance.py

from typing import Iterable

from core.errors import DuplicateRecordError, ValidationMismatchError
from core.logging_config import logger
from core.utils import drop_none
from models.attendance import AttendanceCreate, AttendanceRead
from services.base import EntityService


class AttendanceService(EntityService[AttendanceRead]):
    """
    Create + read only. Both pre-checks run before any remote call;
    the store itself does not enforce (date, service) uniqueness, so the
    duplicate check only sees what is already loaded.
    """

    table = "attendance"
    order_column = "service_date"
    read_model = AttendanceRead

    def to_row(self, fields, *, partial: bool = False) -> dict:
        # Leave the columns of the other attendance shape untouched
        return drop_none(super().to_row(fields, partial=partial))

    @staticmethod
    def ensure_not_duplicate(fields: AttendanceCreate, existing: Iterable[AttendanceRead]):
        key = fields.composite_key()
        for record in existing:
            if record.is_aggregate == fields.is_aggregate and record.composite_key() == key:
                logger.warning(
                    f"Duplicate attendance rejected: {fields.service_date} {fields.service_type}"
                )
                raise DuplicateRecordError(
                    "Attendance already recorded for this date and service. "
                    "Please edit the existing record."
                )

    @staticmethod
    def validate_counts(fields: AttendanceCreate):
        if not fields.is_aggregate:
            return

        calculated = fields.counted_total()
        if calculated != fields.total_count:
            logger.warning(
                f"Attendance count mismatch: total={fields.total_count} sum={calculated}"
            )
            raise ValidationMismatchError(fields.total_count, calculated)

    async def create(self, fields: AttendanceCreate, existing: Iterable[AttendanceRead] = ()) -> AttendanceRead:
        self.ensure_not_duplicate(fields, existing)
        self.validate_counts(fields)
        return await self._insert(self.to_row(fields))
