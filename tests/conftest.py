import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.core.limiter import limiter
from app.database.supabase_client import get_supabase, get_service_supabase
from app.main import app
from app.modules.auth.service import clear_auth_cache


class FakeQuery:
    """Chainable stand-in for a postgrest table query, evaluated against FakeSupabase.tables."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.orders = []
        self._limit = None
        self._offset = 0
        self._single = False

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row[column]) >= str(value))
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and str(row[column]) <= str(value))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def offset(self, n):
        self._offset = n
        return self

    def single(self):
        self._single = True
        return self

    def _matching(self):
        rows = self.db.tables.setdefault(self.table, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self.columns.split(",")}

    def execute(self):
        if self.db.fail_tables and self.table in self.db.fail_tables:
            raise Exception(f"backend unavailable: {self.table}")
        rows = self.db.tables.setdefault(self.table, [])
        if self.op != "select" and self.table in self.db.silent_tables:
            return SimpleNamespace(data=[])
        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = dict(item)
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", self.db.next_timestamp())
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted)
        if self.op == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(dict(row))
            return SimpleNamespace(data=updated)
        if self.op == "delete":
            matched = self._matching()
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return SimpleNamespace(data=[dict(row) for row in matched])

        result = self._matching()
        for column, desc in reversed(self.orders):
            present = [r for r in result if r.get(column) is not None]
            missing = [r for r in result if r.get(column) is None]
            present.sort(key=lambda r: str(r[column]), reverse=desc)
            result = present + missing
        result = result[self._offset:]
        if self._limit is not None:
            result = result[:self._limit]
        result = [self._project(row) for row in result]
        if self._single:
            if len(result) != 1:
                raise Exception("JSON object requested, multiple (or no) rows returned")
            return SimpleNamespace(data=result[0])
        return SimpleNamespace(data=result)


class FakeAuth:
    def __init__(self):
        self.users = {}
        self.passwords = {}
        self.tokens = {}
        self.refresh_tokens = {}
        self.oauth_codes = {}
        self.signed_out = 0

    def _user(self, email, metadata=None):
        now = datetime.now(timezone.utc)
        return SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=metadata or {},
            app_metadata={},
            created_at=now,
            updated_at=now,
        )

    def _session(self, user):
        access = f"access-{uuid.uuid4()}"
        refresh = f"refresh-{uuid.uuid4()}"
        self.tokens[access] = user
        self.refresh_tokens[refresh] = user
        session = SimpleNamespace(access_token=access, refresh_token=refresh, expires_in=3600)
        return SimpleNamespace(user=user, session=session)

    def create_user(self, email, password="secret123", full_name=None):
        user = self._user(email, {"full_name": full_name} if full_name else {})
        self.users[email] = user
        self.passwords[email] = password
        return user

    def issue_token(self, user):
        return self._session(user).session.access_token

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise Exception("User already registered")
        metadata = credentials.get("options", {}).get("data")
        user = self.create_user(email, credentials["password"])
        user.user_metadata = metadata or {}
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        return self._session(self.users[email])

    def sign_in_with_oauth(self, credentials):
        provider = credentials["provider"]
        redirect = credentials.get("options", {}).get("redirect_to", "")
        return SimpleNamespace(provider=provider, url=f"https://auth.example.com/{provider}?redirect_to={redirect}")

    def exchange_code_for_session(self, params):
        user = self.oauth_codes.pop(params["auth_code"], None)
        if user is None:
            raise Exception("invalid flow state")
        return self._session(user)

    def refresh_session(self, refresh_token):
        user = self.refresh_tokens.pop(refresh_token, None)
        if user is None:
            raise Exception("Invalid Refresh Token")
        return self._session(user)

    def get_user(self, jwt=None):
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_out(self):
        self.signed_out += 1


class FakeSupabase:
    """In-memory replacement for the supabase Client surface the services use."""

    def __init__(self):
        self.tables = {}
        self.auth = FakeAuth()
        self.fail_tables = set()
        # writes to these tables are dropped and return no rows, like an RLS-filtered write
        self.silent_tables = set()
        self._clock = itertools.count()
        self._epoch = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def next_timestamp(self):
        return (self._epoch + timedelta(seconds=next(self._clock))).isoformat()

    def table(self, name):
        return FakeQuery(self, name)

    def seed(self, name, row):
        return self.table(name).insert(row).execute().data[0]

    def rows(self, name):
        return self.tables.get(name, [])


@pytest.fixture
def fake():
    return FakeSupabase()


@pytest.fixture
def client(fake):
    clear_auth_cache()
    limiter.enabled = False
    app.dependency_overrides[get_supabase] = lambda: fake
    app.dependency_overrides[get_service_supabase] = lambda: fake
    yield TestClient(app)
    app.dependency_overrides.clear()
    limiter.enabled = True
    clear_auth_cache()


def make_user(fake, email, full_name=None, onboard_success=True):
    """Auth user with a mirrored profile row; returns (user, auth headers)."""
    user = fake.auth.create_user(email, full_name=full_name)
    fake.seed("users", {
        "id": user.id,
        "email": email,
        "full_name": full_name,
        "onboard_success": onboard_success,
    })
    token = fake.auth.issue_token(user)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
def household(fake):
    """Household with an owner and one member."""
    owner, owner_headers = make_user(fake, "olivia@example.com", full_name="Olivia Owner")
    member, member_headers = make_user(fake, "max@example.com", full_name="Max Member")
    home = fake.seed("households", {"name": "Olivia's Household", "created_by": owner.id})
    fake.seed("household_members", {"household_id": home["id"], "user_id": owner.id, "role": "owner"})
    fake.seed("household_members", {"household_id": home["id"], "user_id": member.id, "role": "member"})
    return SimpleNamespace(
        id=home["id"],
        owner=owner,
        owner_headers=owner_headers,
        member=member,
        member_headers=member_headers,
    )
