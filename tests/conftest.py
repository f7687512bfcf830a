"""
Pytest configuration and fixtures.

FakeSupabase mimics the slice of the supabase-py / postgrest-py query builder
the services use: table().select/insert/update/delete/upsert, the filters
eq/neq/ilike/in_, order/limit/offset/range, maybe_single, count="exact" and
embedded relations written as ``alias:fk_column(cols)`` or ``child_table(*)``.
"""

import os
import re
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

os.environ["ENVIRONMENT"] = "test"
os.environ["SUPABASE_URL"] = "http://localhost:54321"
os.environ["SUPABASE_KEY"] = "test-anon-key"

from outmentor.core.session import ActorSession  # noqa: E402

# Foreign-key columns embeddable as alias:column(...)
FOREIGN_KEYS = {
    "mentor_id": "profiles",
    "team_id": "profiles",
    "follower_id": "profiles",
    "following_id": "profiles",
    "reporter_id": "profiles",
    "reported_profile_id": "profiles",
    "resolver_id": "profiles",
    "connection_id": "connections",
}

# One-to-one child tables embeddable as table(...), keyed by the parent id
CHILD_TABLES = {
    "mentor_details": "profile_id",
    "team_details": "profile_id",
}

UNIQUE_KEYS = {
    "profiles": ("id",),
    "connections": ("mentor_id", "team_id"),
    "followers": ("follower_id", "following_id"),
    "mentor_details": ("profile_id",),
    "team_details": ("profile_id",),
}

COLUMN_DEFAULTS = {
    "profiles": {"is_admin": False, "is_mentor_verified": False},
    "connections": {"status": "accepted"},
    "reports": {"status": "pending", "resolver_id": None, "resolved_at": None},
    "mentor_details": {"mentor_ftc": False, "mentor_fll": False, "knowledge_areas": []},
    "team_details": {"team_number": None, "team_type": None, "interest_areas": []},
}


class FakeAPIError(Exception):
    pass


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _split_top_level(columns: str) -> List[str]:
    parts, depth, current = [], 0, []
    for ch in columns:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    if "".join(current).strip():
        parts.append("".join(current).strip())
    return parts


_EMBED = re.compile(r"^(?:(\w+):)?(\w+)\((.*)\)$", re.DOTALL)


def _like_to_regex(pattern: str):
    out, i = [], 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out), re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload: Any = None
        self.on_conflict = ""
        self.ignore_duplicates = False
        self.filters = []
        self.order_by = []
        self.limit_value: Optional[int] = None
        self.offset_value = 0
        self.single_mode: Optional[str] = None

    # operations
    def select(self, columns: str = "*", count: Optional[str] = None):
        self.operation, self.columns, self.count_mode = "select", columns, count
        return self

    def insert(self, payload):
        self.operation, self.payload = "insert", payload
        return self

    def upsert(self, payload, on_conflict: str = "", ignore_duplicates: bool = False, **kwargs):
        self.operation, self.payload = "upsert", payload
        self.on_conflict, self.ignore_duplicates = on_conflict, ignore_duplicates
        return self

    def update(self, payload):
        self.operation, self.payload = "update", payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # filters
    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row.get(column) != value)
        return self

    def ilike(self, column, pattern):
        regex = _like_to_regex(pattern)
        self.filters.append(lambda row: row.get(column) is not None and bool(regex.fullmatch(str(row[column]))))
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    # modifiers
    def order(self, column, desc: bool = False):
        self.order_by.append((column, desc))
        return self

    def limit(self, count: int):
        self.limit_value = count
        return self

    def offset(self, count: int):
        self.offset_value = count
        return self

    def range(self, start: int, end: int):
        self.offset_value = start
        self.limit_value = end - start + 1
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    # execution
    def _matching(self) -> List[dict]:
        return [row for row in self.db.tables.setdefault(self.table_name, []) if all(f(row) for f in self.filters)]

    def _project(self, row: dict, columns: str) -> dict:
        result = {}
        for item in _split_top_level(columns):
            if item == "*":
                result.update(row)
                continue
            embed = _EMBED.match(item)
            if not embed:
                result[item] = row.get(item)
                continue
            alias, name, inner = embed.groups()
            key = alias or name
            if name in CHILD_TABLES:
                children = [
                    child for child in self.db.tables.get(name, [])
                    if child.get(CHILD_TABLES[name]) == row.get("id")
                ]
                result[key] = self._project(children[0], inner) if children else None
            else:
                target_table = FOREIGN_KEYS[name]
                target = next(
                    (r for r in self.db.tables.get(target_table, []) if r.get("id") == row.get(name)),
                    None
                )
                result[key] = self._project(target, inner) if target else None
        return result

    def _apply_defaults(self, row: dict) -> dict:
        stored = dict(COLUMN_DEFAULTS.get(self.table_name, {}))
        stored.update(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", self.db.next_timestamp())
        return stored

    def _find_conflict(self, row: dict, columns) -> Optional[dict]:
        if not columns:
            return None
        for existing in self.db.tables.setdefault(self.table_name, []):
            if all(existing.get(c) == row.get(c) for c in columns):
                return existing
        return None

    def _insert_rows(self, rows: List[dict]) -> List[dict]:
        inserted = []
        for row in rows:
            stored = self._apply_defaults(row)
            if self._find_conflict(stored, UNIQUE_KEYS.get(self.table_name)):
                raise FakeAPIError(f'duplicate key value violates unique constraint on "{self.table_name}"')
            self.db.tables.setdefault(self.table_name, []).append(stored)
            inserted.append(dict(stored))
        return inserted

    def execute(self):
        self.db.calls.append((self.table_name, self.operation))
        if self.table_name in self.db.failing_tables:
            raise FakeAPIError("connection to store failed")

        rows = self.payload if isinstance(self.payload, list) else [self.payload]

        if self.operation == "insert":
            return FakeResponse(self._insert_rows(rows))

        if self.operation == "upsert":
            conflict_columns = [c.strip() for c in self.on_conflict.split(",") if c.strip()] \
                or list(UNIQUE_KEYS.get(self.table_name, ("id",)))
            written = []
            for row in rows:
                existing = self._find_conflict(row, conflict_columns)
                if existing is None:
                    written.extend(self._insert_rows([row]))
                elif not self.ignore_duplicates:
                    existing.update(row)
                    written.append(dict(existing))
            return FakeResponse(written)

        if self.operation == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(dict(row))
            return FakeResponse(updated)

        if self.operation == "delete":
            doomed = self._matching()
            self.db.tables[self.table_name] = [
                row for row in self.db.tables[self.table_name] if row not in doomed
            ]
            return FakeResponse([dict(row) for row in doomed])

        matched = self._matching()
        for column, desc in reversed(self.order_by):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        total = len(matched)
        matched = matched[self.offset_value:]
        if self.limit_value is not None:
            matched = matched[:self.limit_value]
        if self.db.max_rows is not None:
            # PostgREST max-rows silently truncates every response
            matched = matched[:self.db.max_rows]
        data = [self._project(row, self.columns) for row in matched]
        count = total if self.count_mode == "exact" else None

        if self.single_mode == "maybe":
            if not data:
                if self.db.maybe_single_raises:
                    raise APIError({"code": "204", "message": "Missing response", "details": None, "hint": None})
                return None
            return FakeResponse(data[0], count)
        if self.single_mode == "single":
            if len(data) != 1:
                raise FakeAPIError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data[0], count)
        return FakeResponse(data, count)


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def create_user(self, attributes: dict):
        return self.auth.sign_up(attributes)

    def sign_out(self, jwt: str, scope: str = "global"):
        self.auth.revoked.append(jwt)
        self.auth.tokens.pop(jwt, None)


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}
        self.tokens: Dict[str, str] = {}
        self.revoked: List[str] = []
        self.admin = FakeAuthAdmin(self)

    def sign_up(self, credentials: dict):
        email = credentials["email"]
        if any(u.email == email for u in self.users.values()):
            raise FakeAPIError("User already registered")
        user = SimpleNamespace(
            id=str(uuid.uuid4()), email=email, password=credentials["password"],
            user_metadata=credentials.get("options", {}).get("data", {}), app_metadata={}
        )
        self.users[user.id] = user
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials: dict):
        for user in self.users.values():
            if user.email == credentials["email"] and user.password == credentials["password"]:
                token = f"token-{user.id}"
                self.tokens[token] = user.id
                return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))
        raise FakeAPIError("Invalid login credentials")

    def get_user(self, jwt: str):
        user_id = self.tokens.get(jwt)
        return SimpleNamespace(user=self.users.get(user_id) if user_id else None)

    def issue_token(self, user_id: str, email: Optional[str] = None) -> str:
        """Log a seeded profile in without going through sign-up"""
        self.users.setdefault(user_id, SimpleNamespace(
            id=user_id, email=email, password=None, user_metadata={}, app_metadata={}
        ))
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return token


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.calls: List[tuple] = []
        self.failing_tables = set()
        self.max_rows: Optional[int] = None
        self.maybe_single_raises = False
        self.auth = FakeAuth()
        self._clock = 0

    def next_timestamp(self) -> str:
        # Strictly increasing so "newest first" ordering is deterministic
        self._clock += 1
        return datetime(2024, 1, 1, tzinfo=timezone.utc).replace(second=0, microsecond=self._clock).isoformat()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, rows: List[dict]) -> List[dict]:
        return [FakeQuery(self, table)._insert_rows([row])[0] for row in rows]

    def rows(self, table: str) -> List[dict]:
        return self.tables.get(table, [])


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def mentor(supabase):
    profile = supabase.seed("profiles", [{
        "id": "mentor-1", "email": "ana@example.com", "role": "mentor",
        "full_name": "Ana Souza", "region": "São Paulo", "city": "Campinas"
    }])[0]
    supabase.seed("mentor_details", [{"profile_id": "mentor-1", "mentor_ftc": True}])
    return profile


@pytest.fixture
def other_mentor(supabase):
    return supabase.seed("profiles", [{
        "id": "mentor-2", "email": "bruno@example.com", "role": "mentor",
        "full_name": "Bruno Lima", "region": "Bahia", "city": "Salvador"
    }])[0]


@pytest.fixture
def team(supabase):
    profile = supabase.seed("profiles", [{
        "id": "team-1", "email": "robo@example.com", "role": "team",
        "full_name": "RoboTitans", "region": "são paulo", "city": "Santos"
    }])[0]
    supabase.seed("team_details", [{"profile_id": "team-1", "team_number": "1234", "team_type": "FTC"}])
    return profile


@pytest.fixture
def admin(supabase):
    return supabase.seed("profiles", [{
        "id": "admin-1", "email": "admin@example.com", "role": None,
        "full_name": "Admin", "region": "", "is_admin": True
    }])[0]


def session_for(profile: dict) -> ActorSession:
    return ActorSession(
        actor_id=profile["id"],
        role=profile.get("role"),
        is_admin=bool(profile.get("is_admin")),
        email=profile.get("email"),
        access_token=f"token-{profile['id']}",
    )


@pytest.fixture
def make_session():
    return session_for


@pytest.fixture
def client(supabase, monkeypatch):
    """TestClient wired to the fake store; auth goes through the fake Supabase Auth"""
    from fastapi.testclient import TestClient
    from outmentor.modules.auth import service as auth_service
    from outmentor.database.supabase_client import get_supabase
    from outmentor.main import app
    from outmentor.modules.auth.service import clear_auth_cache

    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: supabase
    monkeypatch.setattr(auth_service, "get_service_supabase", lambda: supabase)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def auth_headers(supabase):
    def _headers(profile: dict) -> dict:
        token = supabase.auth.issue_token(profile["id"], profile.get("email"))
        return {"Authorization": f"Bearer {token}"}
    return _headers
