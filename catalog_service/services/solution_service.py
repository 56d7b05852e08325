"""
Solution service
Published catalog listing
"""

from typing import Any, Dict, List, Optional

import structlog

from shared.schemas.solution import Solution, SolutionStatus
from shared.utils.supabase_client import SupabaseClient, get_supabase_client

logger = structlog.get_logger(__name__)

SOLUTIONS_TABLE = "solutions"


class SolutionService:
    """Reads approved solutions from the `solutions` table"""

    def __init__(self, supabase: Optional[SupabaseClient] = None):
        self.supabase = supabase or get_supabase_client()

    async def list_approved(self, limit: int, offset: int = 0) -> List[Dict[str, Any]]:
        """Approved solutions, newest first; raises SupabaseError"""
        rows = await self.supabase.select(
            SOLUTIONS_TABLE,
            filters={"status": SolutionStatus.APPROVED.value},
            order_by="created_at",
            descending=True,
            limit=limit,
            offset=offset
        )
        logger.info("Solutions listed", count=len(rows), offset=offset)
        return [Solution.model_validate(row).model_dump(mode="json") for row in rows]


_solution_service: Optional[SolutionService] = None


def get_solution_service() -> SolutionService:
    """Get solution service instance"""
    global _solution_service
    if _solution_service is None:
        _solution_service = SolutionService()
    return _solution_service
