"""
Pytest configuration for user-service tests
"""

import copy
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.utils.security import SecurityUtils
from user_service.config import UserServiceConfig
from user_service.utils.database import AccountDatabase

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeSupabase:
    """In-memory stand-in for the table and admin calls of SupabaseClient"""

    def __init__(self):
        self.tables = {"users": []}
        self.password_updates = []
        self.password_result = {"success": True}
        self.sign_up = AsyncMock()
        self.sign_in = AsyncMock()
        self.sign_out = AsyncMock(return_value={"success": True})
        self.get_user = AsyncMock()

    @staticmethod
    def _matches(row, filters):
        return all(row.get(column) == value for column, value in (filters or {}).items())

    async def select(self, table, filters=None, order_by=None, descending=True, limit=None, offset=0):
        rows = [copy.deepcopy(r) for r in self.tables.setdefault(table, []) if self._matches(r, filters)]
        if limit is not None:
            rows = rows[offset:offset + limit]
        return rows

    async def select_one(self, table, filters):
        rows = await self.select(table, filters, limit=1)
        return rows[0] if rows else None

    async def upsert(self, table, row, on_conflict):
        rows = self.tables.setdefault(table, [])
        for existing in rows:
            if existing.get(on_conflict) == row.get(on_conflict):
                existing.update(row)
                return copy.deepcopy(existing)
        stored = {"id": len(rows) + 1, **row}
        rows.append(stored)
        return copy.deepcopy(stored)

    async def update(self, table, values, filters):
        updated = []
        for row in self.tables.setdefault(table, []):
            if self._matches(row, filters):
                row.update(values)
                updated.append(copy.deepcopy(row))
        return updated

    async def update_user_password(self, user_id, password):
        self.password_updates.append((user_id, password))
        return self.password_result

    def user(self, user_id):
        return next(r for r in self.tables["users"] if r["user_id"] == user_id)


class Clock:
    """Settable clock for token age checks"""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def database(supabase):
    return AccountDatabase(supabase=supabase)


@pytest.fixture
def notifier():
    mock = MagicMock()
    mock.send_confirmation_email = AsyncMock(return_value={"success": True})
    mock.send_password_reset_email = AsyncMock(return_value={"success": True})
    return mock


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def config():
    return UserServiceConfig(
        supabase_url="",
        supabase_anon_key="",
        supabase_service_key="",
        reset_token_ttl_hours=24,
        confirmation_token_ttl_hours=None,
        current_user_timeout=0.2,
    )


@pytest.fixture
def verification(database, supabase, notifier, config, clock):
    from user_service.services.verification_service import VerificationService

    return VerificationService(
        database=database,
        supabase=supabase,
        notifier=notifier,
        security=SecurityUtils(),
        config=config,
        clock=clock,
    )


@pytest.fixture
def vendor_row():
    return {
        "id": 1,
        "user_id": "user-1",
        "email": "vendor@example.com",
        "contact_name": "Sara",
        "company_name": "Acme AI",
        "country": "KSA",
        "role": "User",
        "email_confirmed": False,
        "email_confirmation_token": None,
        "confirmation_sent_at": None,
        "token_kind": None,
    }
