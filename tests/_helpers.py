"""
Shared test helpers - importable from test modules.

``FakeSupabase`` is an in-memory stand-in for the async Supabase client:
the PostgREST builder chain (select / order / eq / limit / insert /
update / delete / execute) over plain dict tables, plus the auth calls
the session manager makes. Every remote call is recorded in ``calls``
and any table/operation can be made to fail.
"""

import asyncio
import itertools
from types import SimpleNamespace
from typing import Dict, List, Optional

from core.permissions import (
    ATTENDANCE,
    COMMUNICATIONS,
    DASHBOARD,
    EQUIPMENT,
    FINANCES,
    MEMBERS,
    USERS,
    VIEW,
    VISITORS,
)


PASSWORD = "secret123"


# ============================================================
# Fake PostgREST query builder
# ============================================================
class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.max_rows: Optional[int] = None

    def select(self, columns: str = "*"):
        self.op, self.columns = "select", columns
        return self

    def insert(self, row: dict):
        self.op, self.payload = "insert", row
        return self

    def update(self, row: dict):
        self.op, self.payload = "update", row
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column: str, value):
        self.filters.append((column, value, True))
        return self

    def neq(self, column: str, value):
        self.filters.append((column, value, False))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n: int):
        self.max_rows = n
        return self

    def _matches(self, row: dict) -> bool:
        return all((str(row.get(col)) == str(val)) == equal for col, val, equal in self.filters)

    async def execute(self):
        self.db.calls.append((self.table, self.op))

        delay = self.db.delays.get(self.table)
        if delay:
            await asyncio.sleep(delay)

        if (self.table, self.op) in self.db.failures:
            raise Exception(self.db.failures[(self.table, self.op)])

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            row = dict(self.payload)
            row.setdefault("id", f"{self.table}-{next(self.db.ids)}")
            row.setdefault("created_at", next(self.db.ids))
            row.update(self.db.stored_overrides.get(self.table, {}))
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "delete":
            matched = [row for row in rows if self._matches(row)]
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=matched)

        result = [dict(row) for row in rows if self._matches(row)]

        if self.table == "user_roles" and "roles (" in self.columns:
            roles_by_id = {r["id"]: r for r in self.db.tables.get("roles", [])}
            for row in result:
                row["roles"] = roles_by_id.get(row["role_id"])

        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: (r.get(column) is not None, r.get(column)), reverse=desc)
        if self.max_rows is not None:
            result = result[: self.max_rows]
        return SimpleNamespace(data=result)


# ============================================================
# Fake auth (GoTrue)
# ============================================================
class FakeSubscription:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def unsubscribe(self):
        self.auth.callbacks.clear()


class FakeAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    async def create_user(self, attributes: dict):
        if self.auth.fail_admin:
            raise Exception("User already registered")
        user = self.auth.register(attributes["email"], attributes["password"])
        return SimpleNamespace(user=user)


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}
        self.passwords: Dict[str, str] = {}
        self.current = None
        self.callbacks = []
        self.sign_out_calls: List[dict] = []
        self.fail_get_session = False
        self.fail_sign_out = False
        self.fail_admin = False
        self.admin = FakeAdmin(self)

    def register(self, email: str, password: str, user_id: Optional[str] = None):
        user = SimpleNamespace(id=user_id or f"user-{len(self.users) + 1}", email=email)
        self.users[email] = user
        self.passwords[email] = password
        return user

    def session_for(self, email: str):
        return SimpleNamespace(user=self.users[email], access_token=f"token-{email}")

    def _fire(self, event: str):
        # The real async client notifies subscribers synchronously, before returning
        for callback in list(self.callbacks):
            callback(event, self.current)

    async def get_session(self):
        if self.fail_get_session:
            raise Exception("network unreachable")
        return self.current

    async def sign_in_with_password(self, credentials: dict):
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        self.current = self.session_for(email)
        self._fire("SIGNED_IN")
        return SimpleNamespace(session=self.current, user=self.current.user)

    async def sign_up(self, credentials: dict):
        if credentials["email"] in self.users:
            raise Exception("User already registered")
        self.register(credentials["email"], credentials["password"])
        self.current = self.session_for(credentials["email"])
        self._fire("SIGNED_IN")
        return SimpleNamespace(session=self.current, user=self.current.user)

    async def sign_in_with_oauth(self, credentials: dict):
        return SimpleNamespace(
            provider=credentials["provider"],
            url=f"https://auth.example.org/authorize?provider={credentials['provider']}",
        )

    async def sign_out(self, options: Optional[dict] = None):
        self.sign_out_calls.append(options or {})
        if self.fail_sign_out:
            raise Exception("sign out request failed")
        self.current = None
        self._fire("SIGNED_OUT")

    def on_auth_state_change(self, callback):
        self.callbacks.append(callback)
        return FakeSubscription(self)


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[tuple, str] = {}
        self.delays: Dict[str, float] = {}
        # Columns the "server" rewrites on insert, e.g. a trigger nulling a field
        self.stored_overrides: Dict[str, dict] = {}
        self.ids = itertools.count(1)
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, message: str = "boom"):
        self.failures[(table, op)] = message

    def calls_to(self, table: str, op: Optional[str] = None) -> List[tuple]:
        return [c for c in self.calls if c[0] == table and (op is None or c[1] == op)]


# ============================================================
# Seed data
# ============================================================
ROLE_ROWS = [
    {"id": "role-super", "name": "super_admin", "description": "Everything", "permissions": {}},
    {
        "id": "role-admin",
        "name": "admin",
        "description": "Church office",
        "permissions": {
            DASHBOARD: True,
            MEMBERS: True,
            ATTENDANCE: True,
            FINANCES: True,
            COMMUNICATIONS: True,
            VISITORS: True,
            EQUIPMENT: True,
            USERS: False,
        },
    },
    {
        "id": "role-staff",
        "name": "staff",
        "description": "Read-mostly",
        "permissions": {DASHBOARD: VIEW, MEMBERS: VIEW, VISITORS: VIEW, COMMUNICATIONS: True},
    },
    {"id": "role-user", "name": "user", "description": "Default", "permissions": {DASHBOARD: VIEW}},
]


def member_row(member_id: str, name: str, **overrides) -> dict:
    row = {
        "id": member_id,
        "member_number": 1,
        "name": name,
        "phone": "555-0100",
        "email": f"{member_id}@church.org",
        "department": "Faith",
        "baptism_status": "baptized",
        "status": "active",
        "join_date": "2020-01-05",
        "birth_date": "1990-06-15",
        "address": "1 Chapel Rd",
        "photo": None,
        "created_at": 0,
    }
    row.update(overrides)
    return row


def seed_church(db: FakeSupabase):
    db.tables["roles"] = [dict(r) for r in ROLE_ROWS]

    for user_id, email, role_id in [
        ("u-super", "super@church.org", "role-super"),
        ("u-admin", "admin@church.org", "role-admin"),
        ("u-staff", "staff@church.org", "role-staff"),
        ("u-none", "nobody@church.org", None),
    ]:
        db.auth.register(email, PASSWORD, user_id=user_id)
        if role_id:
            db.tables.setdefault("user_roles", []).append({"user_id": user_id, "role_id": role_id})

    db.tables["members"] = [
        member_row("m-1", "Grace Mensah"),
        member_row("m-2", "Samuel Osei", member_number=2, department="Love"),
    ]
    db.tables["attendance"] = [
        {
            "id": "a-1",
            "service_date": "2024-01-07",
            "service_type": "sunday-encounter",
            "total_count": 120,
            "men_count": 40,
            "women_count": 50,
            "youth_count": 10,
            "children_count": 15,
            "guests_count": 5,
        }
    ]
    db.tables["donations"] = [
        {
            "id": "d-1",
            "member_id": "m-1",
            "amount": 100.0,
            "category": "tithe",
            "date": "2024-01-07",
            "method": "cash",
            "receipt_sent": True,
        }
    ]
    db.tables["visitors"] = [
        {
            "id": "v-1",
            "name": "Ama Owusu",
            "phone": "555-0200",
            "visit_date": "2024-01-07",
            "follow_up_status": "pending",
        }
    ]
    db.tables["equipment"] = [
        {
            "id": "e-1",
            "name": "Mixer",
            "category": "Audio",
            "condition": "good",
            "purchase_date": "2022-03-01",
            "value": 1500.0,
            "location": "Sanctuary",
        }
    ]
    db.tables["message_templates"] = [
        {"id": "t-1", "name": "Welcome", "subject": "Welcome!", "content": "Glad you came", "type": "sms"}
    ]


