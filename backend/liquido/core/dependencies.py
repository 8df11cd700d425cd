"""
Dependency wiring for the FastAPI app

Clients and services are process-wide singletons so the catalog source
selection and the component cache survive across requests.
"""
from typing import Optional

from fastapi import HTTPException, status

from liquido.connectors.cloudinary_connector import CloudinaryConnector
from liquido.connectors.firebase_auth_connector import FirebaseAuthConnector
from liquido.connectors.firebase_connector import FirebaseConnector
from liquido.connectors.sumup_connector import SumUpConnector
from liquido.core.config import get_settings
from liquido.renderers import ComponentLoader
from liquido.repositories import CatalogRepository, StatsRepository, UserRepository
from liquido.services.admin_service import AdminService
from liquido.services.auth_service import AuthService
from liquido.services.catalog_service import CatalogService
from liquido.services.customer_service import CustomerService
from liquido.services.visits_service import VisitsService

_firebase_connector: Optional[FirebaseConnector] = None
_catalog_service: Optional[CatalogService] = None
_component_loader: Optional[ComponentLoader] = None


def _not_configured(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


def get_firebase_connector() -> Optional[FirebaseConnector]:
    """Realtime Database connector, or None when FIREBASE_DATABASE_URL is unset"""
    global _firebase_connector
    if _firebase_connector:
        return _firebase_connector

    if not get_settings().FIREBASE_DATABASE_URL:
        return None
    _firebase_connector = FirebaseConnector()
    return _firebase_connector


def require_firebase_connector() -> FirebaseConnector:
    connector = get_firebase_connector()
    if connector is None:
        raise _not_configured("Firebase database not configured. Set FIREBASE_DATABASE_URL")
    return connector


def get_catalog_service() -> CatalogService:
    global _catalog_service
    if _catalog_service:
        return _catalog_service

    connector = get_firebase_connector()
    repository = CatalogRepository(connector) if connector else None
    _catalog_service = CatalogService(repository, get_settings().CATALOG_FALLBACK_PATH)
    return _catalog_service


def get_component_loader() -> ComponentLoader:
    global _component_loader
    if _component_loader:
        return _component_loader

    _component_loader = ComponentLoader(get_settings().COMPONENTS_DIR)
    return _component_loader


def get_user_repository() -> UserRepository:
    return UserRepository(require_firebase_connector())


def get_stats_repository() -> StatsRepository:
    return StatsRepository(require_firebase_connector())


def get_auth_service() -> AuthService:
    try:
        auth_connector = FirebaseAuthConnector()
    except ValueError as e:
        raise _not_configured(str(e))
    return AuthService(auth_connector, get_user_repository())


def get_customer_service() -> CustomerService:
    return CustomerService(get_user_repository(), get_settings().WHATSAPP_NUMBER)


def get_admin_service() -> AdminService:
    connector = require_firebase_connector()
    return AdminService(UserRepository(connector), get_catalog_service(), StatsRepository(connector))


def get_visits_service() -> VisitsService:
    return VisitsService(get_stats_repository())


def get_cloudinary_connector() -> CloudinaryConnector:
    try:
        return CloudinaryConnector()
    except ValueError as e:
        raise _not_configured(str(e))


def get_sumup_connector() -> SumUpConnector:
    """Raises SumUpConfigError when no bearer token is configured"""
    return SumUpConnector()
