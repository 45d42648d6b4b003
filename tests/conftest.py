"""
Pytest configuration and shared fixtures for the Ops Dashboard test suite.

Provides an in-memory stand-in for the Supabase client (tables, storage and
auth), a fake PDF renderer, and row factories shared by unit and
integration tests.
"""

import os
import threading
from copy import deepcopy
from datetime import datetime
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from uuid import uuid4

import pytest

# Settings are read when backend.app.main is imported
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")
os.environ.pop("API_KEY", None)

from ops_dashboard.errors import RenderError  # noqa: E402


# ---------------------------------------------------------------------------
# Fake Supabase client
# ---------------------------------------------------------------------------


class FakeAPIError(Exception):
    """Raised by the fake client where PostgREST would return an error."""


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        return parsed.replace(tzinfo=None)
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return value


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode: Optional[str] = None
        self.filters: List[Any] = []
        self.payload: Any = None
        self.order_by: Optional[tuple] = None
        self.row_limit: Optional[int] = None

    # -- builders ---------------------------------------------------------
    def select(self, columns: str = "*", count: Optional[str] = None) -> "FakeQuery":
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, rows) -> "FakeQuery":
        self.operation = "insert"
        self.payload = rows
        return self

    def update(self, values: Dict[str, Any]) -> "FakeQuery":
        self.operation = "update"
        self.payload = values
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self.filters.append(
            lambda row: row.get(column) is not None and _comparable(row[column]) >= _comparable(value)
        )
        return self

    def lt(self, column, value):
        self.filters.append(
            lambda row: row.get(column) is not None and _comparable(row[column]) < _comparable(value)
        )
        return self

    def lte(self, column, value):
        self.filters.append(
            lambda row: row.get(column) is not None and _comparable(row[column]) <= _comparable(value)
        )
        return self

    def in_(self, column, values):
        allowed = list(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    # -- execution --------------------------------------------------------
    def _matches(self, row) -> bool:
        return all(check(row) for check in self.filters)

    def _project(self, row) -> Dict[str, Any]:
        if self.columns.strip() == "*":
            return deepcopy(row)
        names = [name.strip() for name in self.columns.split(",") if name.strip()]
        return {name: deepcopy(row.get(name)) for name in names}

    def execute(self):
        self.client.executed.append((self.table, self.operation))
        if self.table in self.client.failing_tables:
            raise FakeAPIError(f"permission denied for table {self.table}")

        with self.client.lock:
            rows = self.client.tables.setdefault(self.table, [])
            if self.operation == "insert":
                items = self.payload if isinstance(self.payload, list) else [self.payload]
                inserted = []
                for item in items:
                    row = {"id": str(uuid4()), "created_at": datetime.now().isoformat(), **deepcopy(item)}
                    rows.append(row)
                    inserted.append(deepcopy(row))
                return SimpleNamespace(data=inserted, count=None)
            if self.operation == "update":
                updated = []
                for row in rows:
                    if self._matches(row):
                        row.update(deepcopy(self.payload))
                        updated.append(deepcopy(row))
                return SimpleNamespace(data=updated, count=None)
            if self.operation == "delete":
                removed = [row for row in rows if self._matches(row)]
                self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
                return SimpleNamespace(data=removed, count=None)

            selected = [row for row in rows if self._matches(row)]
        if self.order_by is not None:
            column, desc = self.order_by
            present = [row for row in selected if row.get(column) is not None]
            missing = [row for row in selected if row.get(column) is None]
            present.sort(key=lambda row: _comparable(row[column]), reverse=desc)
            selected = present + missing
        total = len(selected)
        if self.row_limit is not None:
            selected = selected[: self.row_limit]
        return SimpleNamespace(
            data=[self._project(row) for row in selected],
            count=total if self.count_mode == "exact" else None,
        )


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str) -> None:
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.name in self.storage.failing_buckets:
            raise FakeAPIError(f"bucket {self.name} is not writable")
        limit = self.storage.upload_limit
        if limit is not None and len(self.storage.objects) >= limit:
            raise FakeAPIError("storage quota exceeded")
        self.storage.objects[(self.name, path)] = {"content": file, "options": file_options or {}}
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}?"

    def remove(self, paths):
        for path in paths:
            self.storage.objects.pop((self.name, path), None)
        self.storage.removed.extend((self.name, path) for path in paths)
        return []


class FakeStorage:
    def __init__(self) -> None:
        self.objects: Dict[tuple, Dict[str, Any]] = {}
        self.removed: List[tuple] = []
        self.failing_buckets: set = set()
        # uploads past this many stored objects fail
        self.upload_limit: Optional[int] = None

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self) -> None:
        self.users: Dict[str, Dict[str, Any]] = {}
        self.signed_out = False

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.users:
            raise FakeAPIError("User already registered")
        user = SimpleNamespace(id=str(uuid4()), email=email)
        self.users[email] = {"user": user, "password": credentials["password"]}
        return SimpleNamespace(user=user, session=None)

    def sign_in_with_password(self, credentials):
        account = self.users.get(credentials["email"])
        if account is None or account["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        return SimpleNamespace(user=account["user"], session=SimpleNamespace(access_token="token"))

    def sign_out(self):
        self.signed_out = True


class FakeSupabase:
    """In-memory replacement for ``supabase.Client``."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = deepcopy(tables or {})
        self.failing_tables: set = set()
        self.executed: List[tuple] = []
        self.lock = threading.Lock()
        self.storage = FakeStorage()
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])


class FakeRenderer:
    """Records the HTML it was given and returns a tiny PDF payload."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.rendered: List[str] = []
        self.options: List[Any] = []

    async def render(self, html: str, options=None) -> bytes:
        if self.fail:
            raise RenderError("Failed to generate PDF")
        self.rendered.append(html)
        self.options.append(options)
        return b"%PDF-1.4 fake"


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------


def make_car(**overrides) -> Dict[str, Any]:
    defaults = dict(
        id=str(uuid4()),
        title="Toyota Corolla",
        brand="Toyota",
        year=2020,
        status="used",
        provider=None,
        kilometers=45000,
        sale_price=80000,
        car_number="12-345-67",
        created_at="2024-03-10T09:00:00",
    )
    defaults.update(overrides)
    return defaults


def make_deal(**overrides) -> Dict[str, Any]:
    defaults = dict(id=str(uuid4()), amount=10000, created_at="2024-03-10T09:00:00")
    defaults.update(overrides)
    return defaults


def make_booking(**overrides) -> Dict[str, Any]:
    defaults = dict(
        id=str(uuid4()),
        booking_type="full_trip",
        status="confirmed",
        total_amount=5000,
        trip_date="2024-03-20",
        destination_id=None,
        school_id=None,
        created_at="2024-03-05T09:00:00",
    )
    defaults.update(overrides)
    return defaults


def make_provider(**overrides) -> Dict[str, Any]:
    defaults = dict(
        id=str(uuid4()),
        name="Dana Guide",
        email="dana@example.com",
        phone="050-0000000",
        user_id=str(uuid4()),
        status="active",
    )
    defaults.update(overrides)
    return defaults


def make_booking_service(booking_id: str, service_id: str, **overrides) -> Dict[str, Any]:
    defaults = dict(
        id=str(uuid4()),
        booking_id=booking_id,
        service_type="guides",
        service_id=service_id,
        quantity=1,
        days=1,
        booked_price=500,
    )
    defaults.update(overrides)
    return defaults


def make_payout(service_id: str, **overrides) -> Dict[str, Any]:
    defaults = dict(
        id=str(uuid4()),
        type="payment",
        status="paid",
        service_type="guides",
        service_id=service_id,
        amount=200,
        payment_date="2024-03-25",
    )
    defaults.update(overrides)
    return defaults


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def anchor() -> datetime:
    """Wednesday 20 March 2024, mid-morning."""
    return datetime(2024, 3, 20, 10, 30)
