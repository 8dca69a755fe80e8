from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# MEMBERS
# -----------------------------------------------------
class Department(BaseStrEnum):
    faith = "Faith"
    love = "Love"
    hope = "Hope"


class BaptismStatus(BaseStrEnum):
    baptized = "baptized"
    not_baptized = "not-baptized"
    scheduled = "scheduled"


class MemberStatus(BaseStrEnum):
    active = "active"
    inactive = "inactive"


# -----------------------------------------------------
# ATTENDANCE
# -----------------------------------------------------
class ServiceType(BaseStrEnum):
    """The three weekly services attendance is recorded for."""

    sunday_encounter = "sunday-encounter"
    wednesday_miracle = "wednesday-miracle"
    friday_prayer = "friday-prayer"


# -----------------------------------------------------
# DONATIONS
# -----------------------------------------------------
class DonationCategory(BaseStrEnum):
    tithe = "tithe"
    offering = "offering"
    project = "project"
    special = "special"


class PaymentMethod(BaseStrEnum):
    cash = "cash"
    check = "check"
    online = "online"
    transfer = "transfer"


# -----------------------------------------------------
# VISITORS
# -----------------------------------------------------
class FollowUpStatus(BaseStrEnum):
    """Follow-up workflow for first-time visitors."""

    pending = "pending"
    contacted = "contacted"
    completed = "completed"


# -----------------------------------------------------
# EQUIPMENT
# -----------------------------------------------------
class EquipmentCondition(BaseStrEnum):
    excellent = "excellent"
    good = "good"
    fair = "fair"
    needs_repair = "needs-repair"


# -----------------------------------------------------
# MESSAGE TEMPLATES
# -----------------------------------------------------
class TemplateType(BaseStrEnum):
    sms = "sms"
    email = "email"
