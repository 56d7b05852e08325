"""
Supabase Client Configuration
Authentication and table access for the managed auth/database backend
"""

import os
import asyncio
from supabase import create_client, Client
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class SupabaseError(Exception):
    """Raised when a table or RPC call against Supabase fails"""
    pass


class SupabaseClient:
    """Supabase client wrapper for authentication and data access"""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        service_key: Optional[str] = None
    ):
        self.url: str = url if url is not None else os.getenv("SUPABASE_URL", "")
        self.key: str = key if key is not None else os.getenv("SUPABASE_ANON_KEY", "")
        self.service_key: str = service_key if service_key is not None else os.getenv("SUPABASE_SERVICE_KEY", "")
        self.client: Optional[Client] = None
        self.admin_client: Optional[Client] = None

        if self.url and self.key:
            try:
                self.client = create_client(self.url, self.key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {e}")
                self.client = None
        else:
            logger.warning("Supabase credentials not found in environment")

        if self.url and self.service_key:
            try:
                self.admin_client = create_client(self.url, self.service_key)
            except Exception as e:
                logger.error(f"Failed to initialize Supabase admin client: {e}")
                self.admin_client = None

    def get_client(self) -> Optional[Client]:
        """Get Supabase client instance"""
        return self.client

    def is_available(self) -> bool:
        """Check if Supabase is available and configured"""
        return self.client is not None

    def _require_client(self) -> Client:
        if not self.client:
            raise SupabaseError("Supabase client not available")
        return self.client

    def _data_client(self) -> Client:
        """Client used for table access; the service role bypasses row level security"""
        return self.admin_client or self._require_client()

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def sign_up(self, email: str, password: str, metadata: dict = None) -> dict:
        """
        Create an auth identity

        Args:
            email: Account email
            password: Account password
            metadata: Profile metadata stored on the identity

        Returns:
            dict: Supabase auth response
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(
                client.auth.sign_up,
                {
                    "email": email,
                    "password": password,
                    "options": {
                        "data": metadata or {}
                    }
                }
            )

            if response.user:
                logger.info(f"Auth identity created: {email}")
                return {
                    "success": True,
                    "user_id": response.user.id,
                    "email": response.user.email,
                    "user_metadata": response.user.user_metadata or {}
                }
            else:
                logger.error(f"Failed to create auth identity: {email}")
                return {
                    "success": False,
                    "error": "Failed to create user"
                }

        except Exception as e:
            logger.error(f"Supabase sign up error: {e}")
            return {
                "success": False,
                "error": str(e)
            }

    async def sign_in(self, email: str, password: str) -> dict:
        """
        Sign in with email and password

        Returns:
            dict: Supabase auth response with session tokens
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(
                client.auth.sign_in_with_password,
                {
                    "email": email,
                    "password": password
                }
            )

            if response.user and response.session:
                logger.info(f"Signed in successfully: {email}")
                return {
                    "success": True,
                    "user_id": response.user.id,
                    "email": response.user.email,
                    "user_metadata": response.user.user_metadata or {},
                    "access_token": response.session.access_token,
                    "refresh_token": response.session.refresh_token,
                    "expires_at": response.session.expires_at
                }
            else:
                return {
                    "success": False,
                    "error": "Invalid credentials"
                }

        except Exception as e:
            logger.error(f"Supabase sign in error: {e}")
            return {
                "success": False,
                "error": str(e)
            }

    async def sign_out(self, access_token: Optional[str] = None) -> dict:
        """Invalidate the session of the given access token, or the client's own session"""
        client = self._require_client()

        try:
            if access_token and self.admin_client:
                await asyncio.to_thread(self.admin_client.auth.admin.sign_out, access_token)
            else:
                await asyncio.to_thread(client.auth.sign_out)
            return {"success": True}

        except Exception as e:
            logger.error(f"Supabase sign out error: {e}")
            return {
                "success": False,
                "error": str(e)
            }

    async def get_user(self, access_token: str) -> dict:
        """
        Resolve the identity behind an access token

        Returns:
            dict: Identity lookup response
        """
        client = self._require_client()

        try:
            response = await asyncio.to_thread(client.auth.get_user, access_token)

            if response and response.user:
                return {
                    "success": True,
                    "user_id": response.user.id,
                    "email": response.user.email,
                    "user_metadata": response.user.user_metadata or {}
                }
            else:
                return {
                    "success": False,
                    "error": "Invalid token"
                }

        except Exception as e:
            logger.error(f"Token verification error: {e}")
            return {
                "success": False,
                "error": str(e)
            }

    async def update_user_password(self, user_id: str, password: str) -> dict:
        """
        Update an identity's password through the admin API

        Args:
            user_id: Auth identity id
            password: New password
        """
        if not self.admin_client:
            return {
                "success": False,
                "error": "Supabase service key not configured"
            }

        try:
            response = await asyncio.to_thread(
                self.admin_client.auth.admin.update_user_by_id,
                user_id,
                {"password": password}
            )

            if response and response.user:
                logger.info(f"Password updated for identity: {user_id}")
                return {"success": True, "user_id": response.user.id}
            return {
                "success": False,
                "error": "Failed to update password"
            }

        except Exception as e:
            logger.error(f"Password update error: {e}")
            return {
                "success": False,
                "error": str(e)
            }

    # ------------------------------------------------------------------
    # Tables and RPC
    # ------------------------------------------------------------------

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Dict[str, Any]]:
        """Select rows matching all equality filters"""
        client = self._data_client()

        def _run():
            query = client.table(table).select("*")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit is not None:
                query = query.range(offset, offset + limit - 1)
            return query.execute()

        try:
            response = await asyncio.to_thread(_run)
            return list(response.data or [])
        except Exception as e:
            logger.error(f"Supabase select on {table} failed: {e}")
            raise SupabaseError(f"Failed to query {table}: {e}") from e

    async def select_one(self, table: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Select the first row matching all equality filters"""
        rows = await self.select(table, filters, limit=1)
        return rows[0] if rows else None

    async def upsert(self, table: str, row: Dict[str, Any], on_conflict: str) -> Optional[Dict[str, Any]]:
        """Insert a row, or update the existing one sharing the conflict column"""
        client = self._data_client()

        try:
            response = await asyncio.to_thread(
                lambda: client.table(table).upsert(row, on_conflict=on_conflict).execute()
            )
            rows = response.data or []
            return rows[0] if rows else None
        except Exception as e:
            logger.error(f"Supabase upsert on {table} failed: {e}")
            raise SupabaseError(f"Failed to upsert into {table}: {e}") from e

    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Update rows matching all equality filters and return the updated rows"""
        if not filters:
            raise SupabaseError("Refusing to update without filters")

        client = self._data_client()

        def _run():
            query = client.table(table).update(values)
            for column, value in filters.items():
                query = query.eq(column, value)
            return query.execute()

        try:
            response = await asyncio.to_thread(_run)
            return list(response.data or [])
        except Exception as e:
            logger.error(f"Supabase update on {table} failed: {e}")
            raise SupabaseError(f"Failed to update {table}: {e}") from e

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Call a database function"""
        client = self._data_client()

        try:
            response = await asyncio.to_thread(
                lambda: client.rpc(function, params or {}).execute()
            )
            return response.data
        except Exception as e:
            logger.error(f"Supabase rpc {function} failed: {e}")
            raise SupabaseError(f"RPC {function} failed: {e}") from e


# Global Supabase client instance
_supabase_client: Optional[SupabaseClient] = None


def get_supabase_client() -> SupabaseClient:
    """Get Supabase client instance"""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = SupabaseClient()
    return _supabase_client
