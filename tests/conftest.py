# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase client (tables, RPC, storage)
# - Session tokens signed with the test JWT secret
# =============================================================================

import os
import time
import uuid
from datetime import datetime, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["ADMIN_EMAILS"] = "owner@studio.test, Editor@Studio.test"
os.environ["AUTH_BYPASS"] = "false"

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from core.services.cache_service import page_cache
from lib.supabase_client import SupabaseClient

ADMIN_EMAIL = "owner@studio.test"
OUTSIDER_EMAIL = "visitor@example.com"


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Subset of the postgrest query builder used by SupabaseClient."""

    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._action = "select"
        self._payload = None
        self._columns = "*"
        self._filters: list[tuple[str, str]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, columns="*", count=None):
        self._action = "select"
        self._columns = columns
        return self

    def insert(self, data):
        self._action = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._action = "update"
        self._payload = data
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, str(value)))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row) -> bool:
        return all(str(row.get(col)) == value for col, value in self._filters)

    def execute(self):
        rows = self._db.tables.setdefault(self._table, [])
        self._db.calls.append((self._action, self._table))

        if self._action != "select" and self._db.fail_writes:
            raise RuntimeError("database unavailable")

        if self._action == "insert":
            now = datetime.now(timezone.utc).isoformat()
            row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **self._payload}
            rows.append(row)
            return FakeResponse([dict(row)])

        if self._action == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self._payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self._action == "delete":
            deleted = [row for row in rows if self._matches(row)]
            self._db.tables[self._table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([dict(row) for row in deleted])

        result = [dict(row) for row in rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            result.sort(key=lambda r: r[column], reverse=desc)
        if self._limit is not None:
            result = result[: self._limit]
        if self._columns != "*":
            wanted = [c.strip() for c in self._columns.split(",")]
            result = [{c: r.get(c) for c in wanted} for r in result]
        return FakeResponse(result)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self._db = db
        self._name = name
        self._params = params

    def execute(self):
        self._db.calls.append(("rpc", self._name))
        if self._name != "reorder_collection":
            raise RuntimeError(f"unknown function {self._name}")
        if self._db.fail_writes:
            raise RuntimeError("database unavailable")

        rows = self._db.tables.setdefault(self._params["collection"], [])
        ids = [str(i) for i in self._params["ids"]]
        if sorted(ids) != sorted(str(r["id"]) for r in rows):
            raise RuntimeError("reorder does not cover the table")

        position = {row_id: index for index, row_id in enumerate(ids)}
        for row in rows:
            row["sort_order"] = position[str(row["id"])]
        return FakeResponse(None)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self._storage = storage
        self._name = name

    def upload(self, path, file, file_options=None):
        if self._storage.fail:
            raise RuntimeError("storage unavailable")
        self._storage.objects[(self._name, path)] = file
        return {"Key": f"{self._name}/{path}"}

    def get_public_url(self, path):
        return f"https://test-project.supabase.co/storage/v1/object/public/{self._name}/{path}"

    def remove(self, paths):
        if self._storage.fail:
            raise RuntimeError("storage unavailable")
        for path in paths:
            self._storage.objects.pop((self._name, path), None)
        return []


class FakeStorage:
    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.fail = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)

    def list_buckets(self):
        return [{"name": "projects"}, {"name": "team"}]


class FakeSupabase:
    """In-memory replacement for the supabase Client."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {"projects": [], "team_members": []}
        self.calls: list[tuple[str, str]] = []
        self.fail_writes = False
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params):
        return FakeRpc(self, name, params)

    def writes(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] != "select"]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db(monkeypatch):
    """Install an empty in-memory database as the Supabase client."""
    db = FakeSupabase()
    monkeypatch.setattr(SupabaseClient, "_instance", db)
    return db


@pytest.fixture(autouse=True)
def clear_page_cache():
    page_cache.clear()
    yield
    page_cache.clear()


def make_token(email: str | None, expires_in: int = 3600, secret: str = "test-jwt-secret") -> str:
    """Sign a Supabase-style access token."""
    claims = {
        "sub": str(uuid.uuid4()),
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
    }
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token(ADMIN_EMAIL)}"}


@pytest.fixture
def outsider_headers():
    return {"Authorization": f"Bearer {make_token(OUTSIDER_EMAIL)}"}


@pytest.fixture
def client(fake_db):
    """TestClient wired to the in-memory database."""
    from app.main import app
    return TestClient(app)


@pytest.fixture
def project_payload():
    """A valid create/update body, as the admin form sends it."""
    return {
        "name": "Sematext Cloud",
        "client": "Sematext",
        "summary": "Monitoring dashboards redesign",
        "startYear": 2021,
        "endYear": 2023,
        "services": ["UX Design", "UI Design"],
        "industry": ["DevOps"],
        "website": "https://sematext.com",
        "heroImage": "https://cdn.test/hero.png",
        "deviceMockup": "https://cdn.test/mockup.png",
        "deviceType": "laptop",
        "layoutVariant": "B",
        "caseStudy": None,
        "caseStudySlug": None,
        "comingSoon": False,
    }


@pytest.fixture
def member_payload():
    return {
        "name": "Ana",
        "role": "Product Designer",
        "babyPhoto": "https://cdn.test/ana-baby.jpg",
        "adultPhoto": "https://cdn.test/ana.jpg",
        "email": "ana@studio.test",
        "linkedin": "https://linkedin.com/in/ana",
        "cvLink": "",
    }
