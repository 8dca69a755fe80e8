# ============================================
# PERMISSION KEYS + BUILT-IN ROLE NAMES
# ============================================
from models.role import Role


# =====================================================
# Permission keys (one per application view)
# =====================================================
DASHBOARD = "dashboard"
MEMBERS = "members"
ATTENDANCE = "attendance"
FINANCES = "finances"            # donations
COMMUNICATIONS = "communications"  # message templates
VISITORS = "visitors"
EQUIPMENT = "equipment"
USERS = "users"

PERMISSION_KEYS = [
    DASHBOARD,
    MEMBERS,
    ATTENDANCE,
    FINANCES,
    COMMUNICATIONS,
    VISITORS,
    EQUIPMENT,
    USERS,
]

# Value that grants read access in a role's permission map
VIEW = "view"


# =====================================================
# Role names (rows of the `roles` table)
# =====================================================
SUPER_ADMIN_ROLE = "super_admin"
ADMIN_ROLE = "admin"
DEFAULT_ROLE_NAME = "user"


# =====================================================
# Coarse UI roles: only these may create/update/delete
# members, attendance, donations, visitors, equipment
# =====================================================
COARSE_SUPER_ADMIN = "superAdmin"
COARSE_ADMIN = "Admin"
COARSE_WRITE_ROLES = {COARSE_ADMIN, COARSE_SUPER_ADMIN}

COARSE_ROLE_NAMES = {
    SUPER_ADMIN_ROLE: COARSE_SUPER_ADMIN,
    ADMIN_ROLE: COARSE_ADMIN,
}


# =====================================================
# FALLBACK: granted when a user has no assignment
# =====================================================
def default_role() -> Role:
    return Role(
        id="default",
        name=DEFAULT_ROLE_NAME,
        description="Default user role",
        permissions={DASHBOARD: VIEW, MEMBERS: VIEW, ATTENDANCE: VIEW},
    )
