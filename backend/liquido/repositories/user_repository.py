"""
User Repository - Data Access Layer for users/<uid>

Profiles, orders and service requests. Status changes are single-field
updates so the rest of the record is never rewritten.
"""
from typing import Any, Dict, Optional

from liquido.connectors.firebase_connector import FirebaseConnector, SERVER_TIMESTAMP
from liquido.domain.user import RequestStatus, ServiceType, UserProfile

USERS_PATH = "users"


class UserRepository:
    """Repository for user profiles and their request subtrees"""

    def __init__(self, connector: FirebaseConnector):
        self.connector = connector

    async def get_all_raw(self) -> Dict[str, Dict[str, Any]]:
        """
        Whole users node

        Returns:
            {uid: {name, email, phone, createdAt, orders?, services?}}
        """
        return await self.connector.get(USERS_PATH) or {}

    async def get_profile(self, uid: str) -> Optional[UserProfile]:
        data = await self.connector.get(f"{USERS_PATH}/{uid}")
        if not data:
            return None
        return UserProfile.model_validate({**data, "uid": uid})

    async def save_profile(self, uid: str, name: str, email: str, phone: str) -> None:
        """Write profile fields, createdAt from the server clock"""
        await self.connector.update(f"{USERS_PATH}/{uid}", {
            "name": name,
            "email": email,
            "phone": phone,
            "createdAt": SERVER_TIMESTAMP,
        })

    async def add_order(self, uid: str, order: Dict[str, Any]) -> str:
        """Push a pending order; returns its id"""
        record = {**order, "createdAt": SERVER_TIMESTAMP, "status": RequestStatus.PENDING.value}
        return await self.connector.push(f"{USERS_PATH}/{uid}/orders", record)

    async def add_service_request(self, uid: str, service_type: ServiceType, request: Dict[str, Any]) -> str:
        """Push a pending service request; returns its id"""
        record = {**request, "createdAt": SERVER_TIMESTAMP, "status": RequestStatus.PENDING.value}
        return await self.connector.push(f"{USERS_PATH}/{uid}/services/{service_type.node}", record)

    async def update_order_status(self, uid: str, order_id: str, status: RequestStatus) -> None:
        await self.connector.update(f"{USERS_PATH}/{uid}/orders/{order_id}", {"status": status.value})

    async def update_service_status(
        self,
        uid: str,
        service_type: ServiceType,
        service_id: str,
        status: RequestStatus
    ) -> None:
        await self.connector.update(
            f"{USERS_PATH}/{uid}/services/{service_type.node}/{service_id}",
            {"status": status.value}
        )
