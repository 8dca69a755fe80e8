# services/donations.py

from models.donation import DonationCreate, DonationRead
from services.base import EntityService


class DonationsService(EntityService[DonationRead]):
    table = "donations"
    order_column = "date"
    read_model = DonationRead

    async def create(self, fields: DonationCreate) -> DonationRead:
        row = self.to_row(fields)
        row["receipt_sent"] = False
        return await self._insert(row)
