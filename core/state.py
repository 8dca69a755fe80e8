# core/state.py

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from supabase import AsyncClient

from core.errors import ChurchAdminError
from core.logging_config import logger
from core.scheduler import ReceiptScheduler
from core.supabase_client import check_connection
from models.attendance import AttendanceCreate, AttendanceRead
from models.donation import DonationCreate, DonationRead
from models.enums import FollowUpStatus
from models.equipment import EquipmentCreate, EquipmentRead, EquipmentUpdate
from models.member import MemberCreate, MemberRead, MemberUpdate
from models.message_template import MessageTemplateCreate, MessageTemplateRead
from models.visitor import VisitorCreate, VisitorRead
from services.attendance import AttendanceService
from services.donations import DonationsService
from services.equipment import EquipmentService
from services.members import MembersService
from services.templates import TemplatesService
from services.visitors import VisitorsService


@dataclass
class EntityServices:
    members: MembersService
    attendance: AttendanceService
    donations: DonationsService
    visitors: VisitorsService
    equipment: EquipmentService
    templates: TemplatesService

    @classmethod
    def for_client(cls, client: AsyncClient) -> "EntityServices":
        return cls(
            members=MembersService(client),
            attendance=AttendanceService(client),
            donations=DonationsService(client),
            visitors=VisitorsService(client),
            equipment=EquipmentService(client),
            templates=TemplatesService(client),
        )


def _replace(items: list, record) -> list:
    return [record if item.id == record.id else item for item in items]


def _without(items: list, record_id: str) -> list:
    return [item for item in items if item.id != record_id]


def _insert_sorted(items: list, record, key) -> list:
    """Place record in a list kept newest-first by ``key``; ties go in front."""
    value = key(record)
    for index, item in enumerate(items):
        if key(item) <= value:
            return [*items[:index], record, *items[index:]]
    return [*items, record]


class ChurchState:
    """
    In-memory snapshot of the six entity collections.

    Collections are only ever replaced by a new list, and only after the
    remote call succeeded; a failed call leaves them exactly as they were.
    All writes go through one asyncio.Lock (single writer).
    """

    def __init__(self, client: Optional[AsyncClient], services: EntityServices, receipts: ReceiptScheduler):
        self.client = client
        self.services = services
        self.receipts = receipts
        self.receipts.bind(self.mark_receipt_sent)

        self.members: List[MemberRead] = []
        self.attendance: List[AttendanceRead] = []
        self.donations: List[DonationRead] = []
        self.visitors: List[VisitorRead] = []
        self.equipment: List[EquipmentRead] = []
        self.templates: List[MessageTemplateRead] = []

        self.loaded = False
        self.load_error: Optional[str] = None
        self._lock = asyncio.Lock()

    # ============================================================
    # Load / reset
    # ============================================================
    def _reset(self):
        self.members, self.attendance, self.donations = [], [], []
        self.visitors, self.equipment, self.templates = [], [], []
        self.loaded = False

    async def load_all(self) -> None:
        """
        Connection check, then the six fetches concurrently. All six
        succeed or none of them count as loaded.
        """
        async with self._lock:
            logger.info("Loading data from Supabase...")
            try:
                await check_connection(self.client)
                results = await asyncio.gather(
                    self.services.members.get_all(),
                    self.services.attendance.get_all(),
                    self.services.donations.get_all(),
                    self.services.visitors.get_all(),
                    self.services.equipment.get_all(),
                    self.services.templates.get_all(),
                )
            except ChurchAdminError as e:
                logger.error(f"Error loading data from Supabase: {e.message}")
                self._reset()
                self.load_error = e.message
                self.receipts.cancel_all()
                raise

            (
                self.members,
                self.attendance,
                self.donations,
                self.visitors,
                self.equipment,
                self.templates,
            ) = results
            self.loaded = True
            self.load_error = None

            # Pending receipts for donations that vanished remotely
            donation_ids = {d.id for d in self.donations}
            for donation_id in self.receipts.pending():
                if donation_id not in donation_ids:
                    self.receipts.cancel(donation_id)

            logger.info("Data loading completed")

    async def clear(self) -> None:
        async with self._lock:
            self.receipts.cancel_all()
            self._reset()
            self.load_error = None

    async def on_session_event(self, event: str, session) -> None:
        """Session listener: fresh data on sign-in, nothing left behind on sign-out."""
        if event == "SIGNED_OUT":
            await self.clear()
        elif event == "SIGNED_IN":
            try:
                await self.load_all()
            except ChurchAdminError:
                # Already recorded in load_error and surfaced by /data/status
                logger.warning("Data load after sign-in failed")

    def status(self) -> dict:
        return {
            "loaded": self.loaded,
            "error": self.load_error,
            "counts": {
                "members": len(self.members),
                "attendance": len(self.attendance),
                "donations": len(self.donations),
                "visitors": len(self.visitors),
                "equipment": len(self.equipment),
                "templates": len(self.templates),
            },
        }

    # ============================================================
    # Members
    # ============================================================
    async def add_member(self, fields: MemberCreate) -> MemberRead:
        async with self._lock:
            member = await self.services.members.create(fields)
            self.members = [member, *self.members]
            return member

    async def update_member(self, member_id: str, fields: MemberUpdate) -> MemberRead:
        async with self._lock:
            member = await self.services.members.update(member_id, fields)
            self.members = _replace(self.members, member)
            return member

    async def delete_member(self, member_id: str) -> None:
        async with self._lock:
            await self.services.members.delete(member_id)
            self.members = _without(self.members, member_id)

    # ============================================================
    # Attendance
    # ============================================================
    async def record_attendance(self, fields: AttendanceCreate) -> AttendanceRead:
        async with self._lock:
            record = await self.services.attendance.create(fields, existing=self.attendance)
            self.attendance = _insert_sorted(self.attendance, record, key=lambda r: r.service_date)
            return record

    # ============================================================
    # Donations
    # ============================================================
    async def add_donation(self, fields: DonationCreate) -> DonationRead:
        async with self._lock:
            donation = await self.services.donations.create(fields)
            self.donations = _insert_sorted(self.donations, donation, key=lambda d: d.date)

        if not donation.receipt_sent:
            self.receipts.schedule(donation.id)
        return donation

    async def mark_receipt_sent(self, donation_id: str) -> bool:
        """Local-only flip of the simulated receipt flag."""
        async with self._lock:
            current = next((d for d in self.donations if d.id == donation_id), None)
            if current is None:
                logger.info(f"Receipt flip skipped, donation {donation_id} no longer loaded")
                return False

            self.donations = _replace(
                self.donations, current.model_copy(update={"receipt_sent": True})
            )
            logger.info(f"Receipt marked as sent for donation {donation_id} (simulated)")
            return True

    # ============================================================
    # Visitors
    # ============================================================
    async def add_visitor(self, fields: VisitorCreate) -> VisitorRead:
        async with self._lock:
            visitor = await self.services.visitors.create(fields)
            self.visitors = [visitor, *self.visitors]
            return visitor

    async def update_follow_up(self, visitor_id: str, status: FollowUpStatus) -> VisitorRead:
        async with self._lock:
            visitor = await self.services.visitors.update_follow_up(visitor_id, status)
            self.visitors = _replace(self.visitors, visitor)
            return visitor

    # ============================================================
    # Equipment
    # ============================================================
    async def add_equipment(self, fields: EquipmentCreate) -> EquipmentRead:
        async with self._lock:
            item = await self.services.equipment.create(fields)
            self.equipment = [item, *self.equipment]
            return item

    async def update_equipment(self, equipment_id: str, fields: EquipmentUpdate) -> EquipmentRead:
        async with self._lock:
            item = await self.services.equipment.update(equipment_id, fields)
            self.equipment = _replace(self.equipment, item)
            return item

    async def delete_equipment(self, equipment_id: str) -> None:
        async with self._lock:
            await self.services.equipment.delete(equipment_id)
            self.equipment = _without(self.equipment, equipment_id)

    # ============================================================
    # Message templates
    # ============================================================
    async def add_template(self, fields: MessageTemplateCreate) -> MessageTemplateRead:
        async with self._lock:
            template = await self.services.templates.create(fields)
            self.templates = [template, *self.templates]
            return template

    async def delete_template(self, template_id: str) -> None:
        async with self._lock:
            await self.services.templates.delete(template_id)
            self.templates = _without(self.templates, template_id)
