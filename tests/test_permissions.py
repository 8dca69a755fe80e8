# tests/test_permissions.py

"""
Tests for the permission gate and the coarse Admin/superAdmin check.
"""

import pytest

from core.errors import PermissionDeniedError
from core.permission_helpers import (
    can_modify,
    coarse_role,
    has_permission,
    require_permission,
    require_write_role,
)
from core.permissions import MEMBERS, default_role
from core.roles import effective_roles
from models.role import Role


def make_role(name, **permissions):
    return Role(id=f"role-{name}", name=name, permissions=permissions)


def test_super_admin_passes_every_check():
    roles = [make_role("super_admin")]

    assert has_permission(roles, "members")
    assert has_permission(roles, "nonexistent_permission")


def test_no_roles_denies_everything():
    assert has_permission([], "members") is False
    assert has_permission([], "dashboard") is False


def test_true_and_view_grant_access():
    assert has_permission([make_role("clerk", members=True)], "members")
    assert has_permission([make_role("viewer", members="view")], "members")


def test_false_or_other_values_deny():
    assert not has_permission([make_role("clerk", members=False)], "members")
    assert not has_permission([make_role("clerk", members="edit")], "members")
    assert not has_permission([make_role("clerk", finances=True)], "members")


def test_any_role_can_grant():
    roles = [make_role("viewer", dashboard="view"), make_role("treasurer", finances=True)]

    assert has_permission(roles, "finances")
    assert has_permission(roles, "dashboard")
    assert not has_permission(roles, "equipment")


def test_require_permission_raises_403():
    with pytest.raises(PermissionDeniedError) as exc:
        require_permission([make_role("viewer", dashboard="view")], MEMBERS)

    assert exc.value.status_code == 403


def test_default_role_is_view_only():
    roles = effective_roles([])

    assert [r.name for r in roles] == ["user"]
    assert has_permission(roles, "dashboard")
    assert has_permission(roles, "members")
    assert has_permission(roles, "attendance")
    assert not has_permission(roles, "finances")


# ============================================================
# Coarse role
# ============================================================
def test_coarse_role_without_roles_is_user():
    assert coarse_role([]) == "user"
    assert can_modify([]) is False


def test_coarse_role_names():
    assert coarse_role([make_role("staff"), make_role("super_admin")]) == "superAdmin"
    assert coarse_role([make_role("admin")]) == "Admin"
    assert coarse_role([make_role("staff")]) == "user"
    assert coarse_role([make_role("staff"), make_role("admin")]) == "Admin"


def test_stored_role_named_like_a_literal_gets_no_write_access():
    assert coarse_role([make_role("Admin")]) == "user"
    assert coarse_role([make_role("superAdmin")]) == "user"
    assert not can_modify([make_role("Admin")])
    assert not can_modify([make_role("superAdmin")])


def test_only_admin_and_super_admin_can_modify():
    assert can_modify([make_role("admin")])
    assert can_modify([make_role("super_admin")])
    assert not can_modify([default_role()])

    with pytest.raises(PermissionDeniedError):
        require_write_role([make_role("staff", members=True)])
