"""
Visits Service
Page visit tracking: one record per visit, a per-day counter and a running
total

Tracking never fails the caller; errors are logged and swallowed at the
counter level.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from liquido.connectors.firebase_connector import FirebaseError
from liquido.repositories.stats_repository import StatsRepository

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class VisitsService:
    """Records visits and reads the counters back"""

    def __init__(self, stats: StatsRepository):
        self.stats = stats

    async def record_visit(self, page: str, user_agent: str = "", referrer: str = None) -> Optional[Dict[str, Any]]:
        """
        Store a visit and bump the daily and total counters

        Returns:
            The stored visit with its id, or None when tracking failed
        """
        visit = {
            "timestamp": _now_ms(),
            "date": datetime.now(timezone.utc).strftime("%Y-%m-%d"),
            "page": page or "/",
            "userAgent": user_agent or "",
            "referrer": referrer or "direct",
        }

        try:
            visit_id = await self.stats.add_visit(visit)
        except FirebaseError as e:
            logger.error(f"Error recording visit: {e}")
            return None

        await self._update_daily_stats(visit["date"])
        await self._increment_total_visits()
        return {"id": visit_id, **visit}

    async def _update_daily_stats(self, day: str) -> None:
        try:
            current = await self.stats.get_daily(day) or {}
            await self.stats.set_daily(day, (current.get("count") or 0) + 1, _now_ms())
        except FirebaseError as e:
            logger.error(f"Error updating daily stats: {e}")

    async def _increment_total_visits(self) -> None:
        try:
            total = await self.stats.get_total_visits()
            await self.stats.set_total_visits(total + 1)
        except FirebaseError as e:
            logger.error(f"Error incrementing total visits: {e}")

    async def get_total_visits(self) -> int:
        try:
            return await self.stats.get_total_visits()
        except FirebaseError as e:
            logger.error(f"Error getting total visits: {e}")
            return 0

    async def get_visits_by_date_range(self, start_date: str, end_date: str) -> List[Dict[str, Any]]:
        """Visits whose date (YYYY-MM-DD) falls within [start_date, end_date]"""
        try:
            visits = await self.stats.get_visits()
        except FirebaseError as e:
            logger.error(f"Error getting visits by date range: {e}")
            return []

        return [
            {"id": visit_id, **visit}
            for visit_id, visit in visits.items()
            if start_date <= (visit.get("date") or "") <= end_date
        ]
