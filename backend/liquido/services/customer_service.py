"""
Customer Service
MyLiquido services for signed-in customers: special product requests,
maintenance bookings and loyal-customer orders

Each request is stored as pending under the user's node and answered with a
wa.me link carrying a pre-filled Italian message for the shop.
"""
import logging
import re
from datetime import date as date_type
from typing import Any, Dict, Optional
from urllib.parse import quote

from liquido.connectors.firebase_connector import FirebaseError
from liquido.domain.user import ServiceType
from liquido.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")


class ServiceRequestError(Exception):
    """Request could not be validated or stored; message is user-facing"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def validate_future_date(value: str, today: date_type = None) -> bool:
    """True for a YYYY-MM-DD date that is today or later"""
    if not value:
        return False
    try:
        selected = date_type.fromisoformat(value)
    except ValueError:
        return False
    return selected >= (today or date_type.today())


def validate_time(value: str) -> bool:
    """True for a 24h HH:MM time"""
    return bool(value) and TIME_PATTERN.match(value) is not None


def _or_na(profile: Dict[str, Any], key: str) -> str:
    return profile.get(key) or "N/A"


def format_product_request_message(image_url: str, message: str, profile: Dict[str, Any]) -> str:
    return (
        "Ciao! Vorrei richiedere un prodotto speciale.\n\n"
        f"[Image: {image_url}]\n\n"
        f"Messaggio: {message}\n\n"
        f"Cliente: {_or_na(profile, 'name')}\n"
        f"Email: {_or_na(profile, 'email')}"
    )


def format_maintenance_message(day: str, time: str, description: str, profile: Dict[str, Any]) -> str:
    return (
        "Ciao! Vorrei prenotare un servizio di manutenzione per la mia vape.\n\n"
        f"Data: {day}\n"
        f"Ora: {time}\n\n"
        f"Descrizione: {description}\n\n"
        f"Cliente: {_or_na(profile, 'name')}\n"
        f"Email: {_or_na(profile, 'email')}\n"
        f"Telefono: {_or_na(profile, 'phone')}"
    )


def format_order_message(product: Dict[str, Any], day: str, time: str, profile: Dict[str, Any]) -> str:
    description = product.get("description") or ""
    return (
        "Ciao! Vorrei ordinare un prodotto come cliente fedele.\n\n"
        f"Prodotto: {product.get('name') or 'Prodotto'}\n"
        f"{f'Descrizione: {description}' if description else ''}\n\n"
        f"Data di ritiro: {day}\n"
        f"Ora di ritiro: {time}\n\n"
        f"Cliente: {_or_na(profile, 'name')}\n"
        f"Email: {_or_na(profile, 'email')}\n"
        f"Telefono: {_or_na(profile, 'phone')}"
    )


class CustomerService:
    """Stores customer requests and builds the WhatsApp hand-off link"""

    def __init__(self, users: UserRepository, whatsapp_number: str):
        self.users = users
        self.whatsapp_number = whatsapp_number

    def whatsapp_url(self, message: str) -> str:
        # same escaping as JavaScript's encodeURIComponent
        encoded = quote(message, safe="-_.!~*'()")
        return f"https://wa.me/{self.whatsapp_number}?text={encoded}"

    async def get_profile(self, uid: str, email: str = None) -> Dict[str, Any]:
        """Stored profile used to sign the WhatsApp message"""
        profile = await self.users.get_profile(uid)
        data = profile.to_dict() if profile else {"uid": uid}
        if not data.get("email") and email:
            data["email"] = email
        return data

    async def request_special_product(
        self,
        uid: str,
        image_url: str,
        message: str,
        profile: Dict[str, Any]
    ) -> Dict[str, str]:
        """
        Store a special product request

        Returns:
            {"requestId": push id, "whatsappUrl": link}
        """
        try:
            request_id = await self.users.add_service_request(uid, ServiceType.PRODUCT_REQUEST, {
                "productImage": image_url,
                "message": message,
            })
        except FirebaseError as e:
            logger.error(f"Error requesting special product for {uid}: {e}")
            raise ServiceRequestError("Errore durante la richiesta. Riprova.") from e

        text = format_product_request_message(image_url, message, profile)
        return {"requestId": request_id, "whatsappUrl": self.whatsapp_url(text)}

    async def request_maintenance(
        self,
        uid: str,
        day: str,
        time: str,
        description: str,
        profile: Dict[str, Any],
        today: Optional[date_type] = None
    ) -> Dict[str, str]:
        """Store a maintenance booking; date must not be in the past"""
        if not validate_future_date(day, today):
            raise ServiceRequestError("Seleziona una data valida (oggi o nel futuro).", 400)
        if not validate_time(time):
            raise ServiceRequestError("Seleziona un'ora valida.", 400)

        try:
            request_id = await self.users.add_service_request(uid, ServiceType.MAINTENANCE_REQUEST, {
                "date": day,
                "time": time,
                "description": description,
            })
        except FirebaseError as e:
            logger.error(f"Error requesting maintenance for {uid}: {e}")
            raise ServiceRequestError("Errore durante la prenotazione. Riprova.") from e

        text = format_maintenance_message(day, time, description, profile)
        return {"requestId": request_id, "whatsappUrl": self.whatsapp_url(text)}

    async def create_order(
        self,
        uid: str,
        product: Dict[str, Any],
        day: str,
        time: str,
        profile: Dict[str, Any]
    ) -> Dict[str, str]:
        """
        Store a loyal-customer pickup order

        Args:
            product: {"name", "description", "details"}
        """
        try:
            order_id = await self.users.add_order(uid, {
                "productName": product.get("name") or "N/A",
                "productDetails": product.get("details") or {},
                "date": day,
                "time": time,
            })
        except FirebaseError as e:
            logger.error(f"Error creating product order for {uid}: {e}")
            raise ServiceRequestError("Errore durante la creazione dell'ordine. Riprova.") from e

        text = format_order_message(product, day, time, profile)
        return {"orderId": order_id, "whatsappUrl": self.whatsapp_url(text)}
