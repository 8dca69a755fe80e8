# tests/test_state.py

"""
Tests for the in-memory church state: loading, writes, receipts.
"""

import asyncio

import pytest
from pydantic import ValidationError

from core.errors import RecordNotFoundError, RemoteQueryError, RemoteWriteError, StoreConnectionError
from core.session import SIGNED_IN, SIGNED_OUT
from models.attendance import AttendanceCreate
from models.donation import DonationCreate
from models.enums import FollowUpStatus
from models.equipment import EquipmentCreate, EquipmentUpdate
from models.member import MemberCreate, MemberUpdate
from models.message_template import MessageTemplateCreate
from models.visitor import VisitorCreate


def new_member(**overrides):
    data = {
        "member_number": 3,
        "name": "  Esther Boateng ",
        "phone": "555-0300",
        "email": "esther@church.org",
        "department": "Hope",
        "baptism_status": "not-baptized",
        "join_date": "2024-01-14",
        "birth_date": "1995-02-20",
        "address": "3 Chapel Rd",
        "photo": "",
    }
    data.update(overrides)
    return MemberCreate(**data)


# ============================================================
# Loading
# ============================================================
async def test_load_all_fills_every_collection(church):
    await church.load_all()

    status = church.status()
    assert status["loaded"] is True
    assert status["error"] is None
    assert status["counts"] == {
        "members": 2,
        "attendance": 1,
        "donations": 1,
        "visitors": 1,
        "equipment": 1,
        "templates": 1,
    }


async def test_load_all_is_all_or_nothing(fake_db, church):
    fake_db.fail("equipment", "select", "relation does not exist")

    with pytest.raises(RemoteQueryError):
        await church.load_all()

    assert church.loaded is False
    assert church.members == []
    assert church.templates == []
    assert "equipment" in church.load_error


async def test_failed_reload_drops_previous_data(fake_db, church):
    await church.load_all()
    fake_db.fail("donations", "select")

    with pytest.raises(RemoteQueryError):
        await church.load_all()

    assert church.members == []
    assert church.loaded is False


async def test_connection_check_failure(fake_db, church):
    fake_db.fail("members", "select", "connection refused")

    with pytest.raises(StoreConnectionError) as exc:
        await church.load_all()

    assert exc.value.status_code == 503
    assert fake_db.calls_to("visitors") == []


async def test_session_events_load_and_clear(church):
    await church.on_session_event(SIGNED_IN, None)
    assert church.loaded

    await church.on_session_event(SIGNED_OUT, None)
    assert church.loaded is False
    assert church.members == []


async def test_sign_in_load_failure_is_recorded_not_raised(fake_db, church):
    fake_db.fail("visitors", "select")

    await church.on_session_event(SIGNED_IN, None)

    assert church.loaded is False
    assert church.load_error is not None


# ============================================================
# Create → get_all round trip
# ============================================================
ROUND_TRIP_CASES = [
    pytest.param("add_member", "members", new_member(), id="member"),
    pytest.param(
        "record_attendance",
        "attendance",
        AttendanceCreate(
            service_date="2024-01-10",
            service_type="wednesday-miracle",
            total_count=60,
            men_count=20,
            women_count=25,
            youth_count=5,
            children_count=6,
            guests_count=4,
            notes="Rainy evening",
        ),
        id="attendance-aggregate",
    ),
    pytest.param(
        "record_attendance",
        "attendance",
        AttendanceCreate(service_date="2024-01-14", service_type="sunday-encounter", member_id="m-2"),
        id="attendance-per-member",
    ),
    pytest.param(
        "add_donation",
        "donations",
        DonationCreate(
            member_id="m-2",
            amount=75.5,
            category="project",
            date="2024-01-21",
            method="online",
            notes="Roof fund",
        ),
        id="donation",
    ),
    pytest.param(
        "add_visitor",
        "visitors",
        VisitorCreate(
            name="Kofi Asante",
            phone="555-0400",
            email="kofi@example.org",
            visit_date="2024-01-14",
            invited_by="Grace Mensah",
            follow_up_status="contacted",
            notes="Interested in the choir",
        ),
        id="visitor",
    ),
    pytest.param(
        "add_equipment",
        "equipment",
        EquipmentCreate(
            name="Projector",
            category="Video",
            condition="excellent",
            purchase_date="2023-05-01",
            value=800,
            location="Hall",
            notes="Ceiling mount",
        ),
        id="equipment",
    ),
    pytest.param(
        "add_template",
        "templates",
        MessageTemplateCreate(
            name="Birthday", subject="Happy birthday", content="Blessings on your day", type="email"
        ),
        id="template",
    ),
]


@pytest.mark.parametrize("add, collection, fields", ROUND_TRIP_CASES)
async def test_create_then_get_all_round_trip(church, add, collection, fields):
    await church.load_all()

    created = await getattr(church, add)(fields)

    reloaded = {r.id: r for r in await getattr(church.services, collection).get_all()}
    assert reloaded[created.id].model_dump(exclude={"id", "receipt_sent"}) == fields.model_dump()
    assert created.id in {r.id for r in getattr(church, collection)}


def test_member_fields_are_normalized_on_input():
    member = new_member()

    assert member.name == "Esther Boateng"
    assert member.photo is None


# ============================================================
# Members
# ============================================================
async def test_failed_create_leaves_collection_unchanged(fake_db, church):
    await church.load_all()
    before = list(church.members)
    fake_db.fail("members", "insert", "duplicate key value")

    with pytest.raises(RemoteWriteError):
        await church.add_member(new_member())

    assert church.members == before


async def test_update_member_is_partial(fake_db, church):
    await church.load_all()

    updated = await church.update_member("m-2", MemberUpdate(status="inactive"))

    assert updated.status == "inactive"
    assert updated.name == "Samuel Osei"
    row = next(r for r in fake_db.tables["members"] if r["id"] == "m-2")
    assert row["department"] == "Love"
    assert next(m for m in church.members if m.id == "m-2").status == "inactive"


async def test_update_missing_member(church):
    await church.load_all()

    with pytest.raises(RecordNotFoundError):
        await church.update_member("m-404", MemberUpdate(name="Nobody"))


async def test_delete_member(church):
    await church.load_all()

    await church.delete_member("m-1")

    assert [m.id for m in church.members] == ["m-2"]


async def test_legacy_member_without_number(fake_db, church):
    fake_db.tables["members"][0]["member_number"] = None

    await church.load_all()

    assert {m.member_number for m in church.members} == {0, 2}


@pytest.mark.parametrize("field", ["name", "phone", "email", "address"])
def test_blank_required_member_text_is_rejected(field):
    with pytest.raises(ValidationError):
        new_member(**{field: "   "})


def test_blank_required_text_is_rejected_for_other_entities():
    with pytest.raises(ValidationError):
        EquipmentCreate(name="Projector", category="", purchase_date="2023-05-01", value=800, location="Hall")
    with pytest.raises(ValidationError):
        MessageTemplateCreate(name="Birthday", subject="", content="Blessings")
    with pytest.raises(ValidationError):
        VisitorCreate(name="Kofi", phone=" ", visit_date="2024-01-14")
    with pytest.raises(ValidationError):
        DonationCreate(member_id="", amount=10, date="2024-01-14")


def test_member_update_cannot_clear_required_column():
    with pytest.raises(ValidationError):
        MemberUpdate(email=None)
    with pytest.raises(ValidationError):
        MemberUpdate(phone="")

    assert MemberUpdate(photo=None).model_dump(exclude_unset=True) == {"photo": None}


async def test_malformed_stored_row_fails_the_whole_load(fake_db, church):
    await church.load_all()
    fake_db.tables["members"][0]["email"] = None

    with pytest.raises(RemoteQueryError):
        await church.load_all()

    assert church.loaded is False
    assert church.members == []
    assert "members" in church.load_error


async def test_unreadable_row_after_insert_is_a_write_error(fake_db, church):
    await church.load_all()
    before = list(church.members)
    fake_db.stored_overrides["members"] = {"phone": None}

    with pytest.raises(RemoteWriteError):
        await church.add_member(new_member())

    assert church.members == before


# ============================================================
# Date ordering
# ============================================================
async def test_back_dated_records_land_in_date_order(church):
    await church.load_all()

    older = await church.add_donation(DonationCreate(member_id="m-1", amount=20, date="2023-12-03"))
    newer = await church.add_donation(DonationCreate(member_id="m-1", amount=30, date="2024-02-04"))

    assert [d.id for d in church.donations] == [newer.id, "d-1", older.id]
    assert [d.id for d in church.donations] == [d.id for d in await church.services.donations.get_all()]

    record = await church.record_attendance(
        AttendanceCreate(service_date="2023-12-31", service_type="sunday-encounter", total_count=0)
    )

    assert [a.id for a in church.attendance] == ["a-1", record.id]


# ============================================================
# Donations + receipts
# ============================================================
async def test_new_donation_receipt_flips_after_delay(church, receipts):
    receipts.start()
    await church.load_all()

    donation = await church.add_donation(
        DonationCreate(member_id="m-2", amount=50, category="offering", date="2024-01-14")
    )

    assert donation.receipt_sent is False
    assert receipts.pending() == [donation.id]

    await asyncio.sleep(0.3)

    stored = next(d for d in church.donations if d.id == donation.id)
    assert stored.receipt_sent is True
    assert receipts.pending() == []


async def test_receipt_cancelled_on_sign_out(church, receipts):
    await church.load_all()
    donation = await church.add_donation(
        DonationCreate(member_id="m-2", amount=50, date="2024-01-14")
    )
    assert receipts.pending() == [donation.id]

    await church.clear()

    assert receipts.pending() == []


async def test_receipt_flip_for_unknown_donation_is_noop(church):
    await church.load_all()

    assert await church.mark_receipt_sent("d-404") is False


async def test_donation_amount_must_be_positive():
    with pytest.raises(ValueError):
        DonationCreate(member_id="m-1", amount=0, date="2024-01-14")


# ============================================================
# Visitors, equipment, templates
# ============================================================
async def test_visitor_follow_up(church):
    await church.load_all()

    visitor = await church.add_visitor(
        VisitorCreate(name="Kofi", phone="555-0400", visit_date="2024-01-14", email="")
    )
    assert visitor.email is None
    assert visitor.follow_up_status == "pending"

    updated = await church.update_follow_up(visitor.id, FollowUpStatus.contacted)
    assert updated.follow_up_status == "contacted"


async def test_equipment_crud(church):
    await church.load_all()

    item = await church.add_equipment(
        EquipmentCreate(
            name="Projector",
            category="Video",
            purchase_date="2023-05-01",
            value=800,
            location="Hall",
        )
    )
    item = await church.update_equipment(item.id, EquipmentUpdate(condition="needs-repair"))
    assert item.condition == "needs-repair"

    await church.delete_equipment(item.id)
    assert [e.id for e in church.equipment] == ["e-1"]


async def test_templates(church):
    await church.load_all()

    template = await church.add_template(
        MessageTemplateCreate(name="Birthday", subject="Happy birthday", content="Blessings", type="email")
    )
    assert church.templates[0].id == template.id

    await church.delete_template(template.id)
    assert [t.id for t in church.templates] == ["t-1"]
