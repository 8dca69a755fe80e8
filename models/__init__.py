# -------------------------
# Member Models
# -------------------------
from .member import (
    MemberBase,
    MemberCreate,
    MemberRead,
    MemberUpdate,
)

# -------------------------
# Attendance Models
# -------------------------
from .attendance import (
    AttendanceBase,
    AttendanceCreate,
    AttendanceRead,
)

# -------------------------
# Donation Models
# -------------------------
from .donation import (
    DonationBase,
    DonationCreate,
    DonationRead,
)

# -------------------------
# Visitor Models
# -------------------------
from .visitor import (
    VisitorBase,
    VisitorCreate,
    VisitorRead,
    FollowUpUpdate,
)

# -------------------------
# Equipment Models
# -------------------------
from .equipment import (
    EquipmentBase,
    EquipmentCreate,
    EquipmentRead,
    EquipmentUpdate,
)

# -------------------------
# Message Templates
# -------------------------
from .message_template import (
    MessageTemplateBase,
    MessageTemplateCreate,
    MessageTemplateRead,
)

# -------------------------
# Roles / Session / Users
# -------------------------
from .role import Role, UserRoleAssignment
from .auth import LoginRequest, SignupRequest, SessionIdentity, SessionRead, OAuthRedirect
from .user import UserCreate, UserRoleUpdate, UserRead

# -------------------------
# Enums
# -------------------------
from .enums import (
    Department,
    BaptismStatus,
    MemberStatus,
    ServiceType,
    DonationCategory,
    PaymentMethod,
    FollowUpStatus,
    EquipmentCondition,
    TemplateType,
)

__all__ = [
    # members
    "MemberBase",
    "MemberCreate",
    "MemberRead",
    "MemberUpdate",

    # attendance
    "AttendanceBase",
    "AttendanceCreate",
    "AttendanceRead",

    # donations
    "DonationBase",
    "DonationCreate",
    "DonationRead",

    # visitors
    "VisitorBase",
    "VisitorCreate",
    "VisitorRead",
    "FollowUpUpdate",

    # equipment
    "EquipmentBase",
    "EquipmentCreate",
    "EquipmentRead",
    "EquipmentUpdate",

    # templates
    "MessageTemplateBase",
    "MessageTemplateCreate",
    "MessageTemplateRead",

    # roles / session / users
    "Role",
    "UserRoleAssignment",
    "LoginRequest",
    "SignupRequest",
    "SessionIdentity",
    "SessionRead",
    "OAuthRedirect",
    "UserCreate",
    "UserRoleUpdate",
    "UserRead",

    # enums
    "Department",
    "BaptismStatus",
    "MemberStatus",
    "ServiceType",
    "DonationCategory",
    "PaymentMethod",
    "FollowUpStatus",
    "EquipmentCondition",
    "TemplateType",
]
