"""
Market insights service
Update schedule of the market insights dashboard, kept in database functions
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import structlog

from shared.utils.supabase_client import SupabaseClient, SupabaseError, get_supabase_client

logger = structlog.get_logger(__name__)

DEFAULT_FREQUENCY = "Weekly"
DEFAULT_DAYS_UNTIL_NEXT_UPDATE = 7
DEFAULT_LAST_UPDATED = datetime(2025, 5, 15, tzinfo=timezone.utc)
DEFAULT_NEXT_UPDATE = datetime(2025, 5, 22, tzinfo=timezone.utc)


def _first_row(data: Any) -> Optional[Dict[str, Any]]:
    """RPC results may come back wrapped in a list"""
    if isinstance(data, list):
        data = data[0] if data else None
    return data if isinstance(data, dict) else None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def default_status(row: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    row = row or {}
    return {
        "last_updated": DEFAULT_LAST_UPDATED,
        "next_update": DEFAULT_NEXT_UPDATE,
        "frequency": row.get("frequency") or DEFAULT_FREQUENCY,
        "days_until_next_update": row.get("days_until_next_update") or DEFAULT_DAYS_UNTIL_NEXT_UPDATE,
        "update_needed": bool(row.get("update_needed")),
    }


class MarketInsightsService:
    """Reads and advances the market insights update schedule"""

    def __init__(self, supabase: Optional[SupabaseClient] = None):
        self.supabase = supabase or get_supabase_client()

    async def get_update_status(self) -> Dict[str, Any]:
        """Current schedule; falls back to fixed defaults on any error"""
        try:
            data = await self.supabase.rpc("get_market_insights_update_status")
        except SupabaseError as e:
            logger.error("Error getting market insights update status", error=str(e))
            return default_status()

        row = _first_row(data)
        last_updated = _parse_datetime(row.get("last_updated")) if row else None
        next_update = _parse_datetime(row.get("next_update")) if row else None

        if row is None or last_updated is None or next_update is None:
            logger.error("Invalid dates received for market insights status", data=data)
            return default_status(row)

        return {
            "last_updated": last_updated,
            "next_update": next_update,
            "frequency": row.get("frequency") or DEFAULT_FREQUENCY,
            "days_until_next_update": row.get("days_until_next_update"),
            "update_needed": bool(row.get("update_needed")),
        }

    async def update_market_insights(self, frequency: str = DEFAULT_FREQUENCY) -> Dict[str, Any]:
        """Mark the insights as refreshed and schedule the next update"""
        try:
            data = await self.supabase.rpc("update_market_insights", {"frequency_param": frequency})
        except SupabaseError as e:
            logger.error("Error updating market insights", error=str(e), frequency=frequency)
            return {"success": False, "message": str(e) or "Failed to update market insights"}

        row = _first_row(data)
        last_updated = _parse_datetime(row.get("last_updated")) if row else None
        next_update = _parse_datetime(row.get("next_update")) if row else None

        if row is None or last_updated is None or next_update is None:
            logger.error("Invalid dates received after market insights update", data=data)
            now = datetime.now(timezone.utc)
            return {
                "success": bool(row.get("success")) if row else False,
                "message": (row.get("message") if row else None) or "Update completed",
                "last_updated": now,
                "next_update": now + timedelta(days=DEFAULT_DAYS_UNTIL_NEXT_UPDATE),
            }

        logger.info("Market insights updated", frequency=frequency, next_update=next_update.isoformat())
        return {
            "success": bool(row.get("success")),
            "message": row.get("message") or "Update completed",
            "last_updated": last_updated,
            "next_update": next_update,
        }

    async def check_update_needed(self) -> bool:
        try:
            data = await self.supabase.rpc("check_update_needed")
        except SupabaseError as e:
            logger.error("Error checking if market insights update is needed", error=str(e))
            return False

        if isinstance(data, list):
            data = data[0] if data else False
        return data is True


_market_insights_service: Optional[MarketInsightsService] = None


def get_market_insights_service() -> MarketInsightsService:
    """Get market insights service instance"""
    global _market_insights_service
    if _market_insights_service is None:
        _market_insights_service = MarketInsightsService()
    return _market_insights_service
