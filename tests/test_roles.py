# tests/test_roles.py

"""
Tests for role resolution through the user_roles → roles join.
"""

from core.roles import RoleResolver


async def test_resolves_joined_roles(resolver):
    roles = await resolver.get_user_roles("u-admin")

    assert [r.name for r in roles] == ["admin"]
    assert roles[0].permissions["members"] is True


async def test_user_without_assignment_gets_empty_list(resolver):
    assert await resolver.get_user_roles("u-none") == []


async def test_query_error_resolves_to_empty_list(fake_db, resolver):
    fake_db.fail("user_roles", "select", "permission denied for table user_roles")

    assert await resolver.get_user_roles("u-admin") == []


async def test_timeout_resolves_to_empty_list(fake_db):
    fake_db.delays["user_roles"] = 0.5
    resolver = RoleResolver(fake_db, timeout=0.05)

    assert await resolver.get_user_roles("u-admin") == []


async def test_join_rows_with_missing_role_are_skipped(fake_db, resolver):
    fake_db.tables["user_roles"].append({"user_id": "u-admin", "role_id": "role-deleted"})

    roles = await resolver.get_user_roles("u-admin")

    assert [r.name for r in roles] == ["admin"]


async def test_standalone_permission_check(resolver):
    assert await resolver.has_permission("u-super", "anything_at_all")
    assert await resolver.has_permission("u-staff", "members")
    assert not await resolver.has_permission("u-staff", "finances")
    # No assignment → empty role list → denied (no default role here)
    assert not await resolver.has_permission("u-none", "dashboard")
