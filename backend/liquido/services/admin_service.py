"""
Admin Service
Back-office views over users, their orders and service requests, plus the
dashboard counters

Lists are built from the whole users node and filtered in memory.
"""
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from liquido.connectors.firebase_connector import FirebaseError
from liquido.domain.user import Order, RequestStatus, ServiceRequest, ServiceType, UserProfile
from liquido.repositories.stats_repository import StatsRepository
from liquido.repositories.user_repository import UserRepository
from liquido.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

ALL = "all"
RECENT_BRANDS_LIMIT = 5


def format_phone_for_whatsapp(phone: str) -> str:
    """
    Digits-only phone with the Italian country code

    '0612 345' -> '39612345', '347 123 4567' -> '393471234567'
    """
    if not phone:
        return ""
    cleaned = re.sub(r"\D", "", phone)
    if cleaned.startswith("0"):
        cleaned = "39" + cleaned[1:]
    if not cleaned.startswith("39"):
        cleaned = "39" + cleaned
    return cleaned


def user_whatsapp_url(phone: str, name: str = None) -> str:
    message = quote(f"Hello {name or 'there'}, this is LIQUIDO. How can we help you today?", safe="-_.!~*'()")
    return f"https://wa.me/{format_phone_for_whatsapp(phone)}?text={message}"


def _user_fields(user: Dict[str, Any]) -> Dict[str, str]:
    return {
        "userName": user.get("name") or "N/A",
        "userEmail": user.get("email") or "N/A",
        "userPhone": user.get("phone") or "N/A",
    }


def _newest_first(items: list) -> list:
    return sorted(items, key=lambda item: item.createdAt or 0, reverse=True)


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


class AdminService:
    """Service for admin listings, status changes and dashboard stats"""

    def __init__(
        self,
        users: UserRepository,
        catalog: CatalogService,
        stats: Optional[StatsRepository] = None
    ):
        self.users = users
        self.catalog = catalog
        self.stats = stats

    # =========================================================================
    # Orders
    # =========================================================================

    async def list_orders(self) -> List[Order]:
        """All orders of all users, newest first"""
        users = await self.users.get_all_raw()
        orders = []
        for uid, user in users.items():
            for order_id, order in (user.get("orders") or {}).items():
                orders.append(Order.model_validate({
                    **_user_fields(user),
                    **order,
                    "orderId": order_id,
                    "userId": uid,
                }))
        return _newest_first(orders)

    @staticmethod
    def filter_orders(orders: List[Order], search: str = "", status: str = ALL) -> List[Order]:
        """Match product name, user name, user email or date; then status"""
        needle = (search or "").lower()
        result = []
        for order in orders:
            matches_search = not needle or (
                _contains(order.productName, needle)
                or _contains(order.userName, needle)
                or _contains(order.userEmail, needle)
                or needle in (order.date or "")
            )
            matches_status = status == ALL or order.status == status
            if matches_search and matches_status:
                result.append(order)
        return result

    async def update_order_status(self, uid: str, order_id: str, status: RequestStatus) -> None:
        await self.users.update_order_status(uid, order_id, status)
        logger.info(f"Order {uid}/{order_id} -> {status.value}")

    # =========================================================================
    # Service requests
    # =========================================================================

    async def list_services(self) -> List[ServiceRequest]:
        """Product and maintenance requests of all users, newest first"""
        users = await self.users.get_all_raw()
        services = []
        for uid, user in users.items():
            nodes = user.get("services") or {}
            for service_type in ServiceType:
                for service_id, request in (nodes.get(service_type.node) or {}).items():
                    services.append(ServiceRequest.model_validate({
                        **_user_fields(user),
                        **request,
                        "serviceId": service_id,
                        "serviceType": service_type,
                        "userId": uid,
                    }))
        return _newest_first(services)

    @staticmethod
    def filter_services(
        services: List[ServiceRequest],
        search: str = "",
        service_type: str = ALL,
        status: str = ALL
    ) -> List[ServiceRequest]:
        """Match user name, email, type label, message or description; then type and status"""
        needle = (search or "").lower()
        result = []
        for service in services:
            matches_search = not needle or any(
                _contains(value, needle)
                for value in (
                    service.userName,
                    service.userEmail,
                    service.typeDisplay,
                    service.message,
                    service.description,
                )
            )
            matches_type = service_type == ALL or service.serviceType.value == service_type
            matches_status = status == ALL or service.status == status
            if matches_search and matches_type and matches_status:
                result.append(service)
        return result

    async def update_service_status(
        self,
        uid: str,
        service_type: ServiceType,
        service_id: str,
        status: RequestStatus
    ) -> None:
        await self.users.update_service_status(uid, service_type, service_id, status)
        logger.info(f"Service {service_type.value} {uid}/{service_id} -> {status.value}")

    # =========================================================================
    # Users
    # =========================================================================

    async def list_users(self) -> List[UserProfile]:
        users = await self.users.get_all_raw()
        profiles = [UserProfile.model_validate({**data, "uid": uid}) for uid, data in users.items()]
        return _newest_first(profiles)

    @staticmethod
    def filter_users(users: List[UserProfile], query: str = "") -> List[UserProfile]:
        needle = (query or "").strip().lower()
        if not needle:
            return list(users)
        return [
            u for u in users
            if needle in u.name.lower() or needle in u.email.lower() or needle in u.phone.lower()
        ]

    # =========================================================================
    # Dashboard
    # =========================================================================

    async def get_dashboard_stats(self) -> Dict[str, Any]:
        """
        Catalog counters for the dashboard

        Returns:
            {
                "sections": int,
                "brands": int (unique names),
                "products": int (number of lines),
                "totalVisits": int or None,
                "source": "firebase" | "json",
                "recentBrands": [{name, section, sectionId, linesCount, logoUrl}]
            }
        """
        sections = await self.catalog.get_sections()

        unique_brands = set()
        total_lines = 0
        all_brands = []
        for section in sections:
            for brand in section.brands:
                unique_brands.add(brand.name)
                total_lines += len(brand.lines)
                all_brands.append({
                    "name": brand.name,
                    "section": section.name,
                    "sectionId": section.id,
                    "linesCount": len(brand.lines),
                    "logoUrl": brand.logo_url,
                })

        total_visits = None
        if self.stats is not None:
            try:
                total_visits = await self.stats.get_total_visits()
            except FirebaseError as e:
                logger.warning(f"Could not read total visits: {e}")

        return {
            "sections": len(sections),
            "brands": len(unique_brands),
            "products": total_lines,
            "totalVisits": total_visits,
            "source": self.catalog.source,
            "recentBrands": list(reversed(all_brands[-RECENT_BRANDS_LIMIT:])),
        }
