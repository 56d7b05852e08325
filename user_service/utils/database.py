"""
Database Access Utilities
Account profile storage in the Supabase `users` table
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from shared.schemas.account import Account, PendingToken, TokenKind, token_columns
from shared.utils.supabase_client import SupabaseClient, get_supabase_client

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AccountDatabase:
    """Account profile queries

    Errors from the backend surface as `SupabaseError`.
    """

    def __init__(self, supabase: Optional[SupabaseClient] = None):
        self.supabase = supabase or get_supabase_client()

    async def get_account_by_email(self, email: str) -> Optional[Account]:
        row = await self.supabase.select_one(USERS_TABLE, {"email": email})
        return Account.from_row(row) if row else None

    async def get_account_by_user_id(self, user_id: str) -> Optional[Account]:
        row = await self.supabase.select_one(USERS_TABLE, {"user_id": user_id})
        return Account.from_row(row) if row else None

    async def get_account_by_token(self, token: str, kind: TokenKind) -> Optional[Account]:
        """
        Find the account holding exactly this pending token

        A token of the other kind is treated as absent.
        """
        row = await self.supabase.select_one(USERS_TABLE, {"email_confirmation_token": token})
        if not row:
            return None

        account = Account.from_row(row)
        if account.pending_token is None or account.pending_token.kind != kind:
            logger.warning(f"Token kind mismatch for account {account.user_id}: expected {kind.value}")
            return None
        return account

    async def upsert_account(self, row: Dict[str, Any]) -> Optional[Account]:
        """Insert the profile, or update the one already keyed on user_id"""
        stored = await self.supabase.upsert(
            USERS_TABLE,
            {**row, "updated_at": _now_iso()},
            on_conflict="user_id"
        )
        return Account.from_row(stored) if stored else None

    async def set_pending_token(self, user_id: str, pending_token: PendingToken) -> bool:
        """Store a token in the account's single slot, replacing whatever was pending"""
        rows = await self.supabase.update(
            USERS_TABLE,
            {**token_columns(pending_token), "updated_at": _now_iso()},
            {"user_id": user_id}
        )
        return bool(rows)

    async def clear_pending_token(self, user_id: str, token: str) -> bool:
        """Clear the slot only if it still holds `token`"""
        rows = await self.supabase.update(
            USERS_TABLE,
            {**token_columns(None), "updated_at": _now_iso()},
            {"user_id": user_id, "email_confirmation_token": token}
        )
        return bool(rows)

    async def mark_email_confirmed(self, user_id: str, token: str) -> bool:
        """Confirm the account and consume its confirmation token"""
        rows = await self.supabase.update(
            USERS_TABLE,
            {"email_confirmed": True, **token_columns(None), "updated_at": _now_iso()},
            {"user_id": user_id, "email_confirmation_token": token}
        )
        return bool(rows)


_account_database: Optional[AccountDatabase] = None


def get_account_database() -> AccountDatabase:
    """Get account database instance"""
    global _account_database
    if _account_database is None:
        _account_database = AccountDatabase()
    return _account_database
