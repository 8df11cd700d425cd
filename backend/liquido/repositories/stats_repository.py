"""
Stats Repository - visits, stats/totalVisits and dailyStats/<date>
"""
from typing import Any, Dict, Optional

from liquido.connectors.firebase_connector import FirebaseConnector


class StatsRepository:
    """Repository for visit tracking counters"""

    def __init__(self, connector: FirebaseConnector):
        self.connector = connector

    async def add_visit(self, visit: Dict[str, Any]) -> str:
        return await self.connector.push("visits", visit)

    async def get_visits(self) -> Dict[str, Dict[str, Any]]:
        return await self.connector.get("visits") or {}

    async def get_daily(self, day: str) -> Optional[Dict[str, Any]]:
        return await self.connector.get(f"dailyStats/{day}")

    async def set_daily(self, day: str, count: int, last_updated: int) -> None:
        await self.connector.set(f"dailyStats/{day}", {
            "date": day,
            "count": count,
            "lastUpdated": last_updated,
        })

    async def get_total_visits(self) -> int:
        return await self.connector.get("stats/totalVisits") or 0

    async def set_total_visits(self, total: int) -> None:
        await self.connector.set("stats/totalVisits", total)
