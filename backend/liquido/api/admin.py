"""
Admin API - Back-office Endpoints
Catalog CRUD, order and service request management, users and dashboard

Every endpoint requires a signed-in account listed in ADMIN_EMAILS.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from liquido.connectors.firebase_connector import FirebaseError
from liquido.core.auth import TokenUser, require_admin
from liquido.core.dependencies import get_admin_service, get_catalog_service
from liquido.domain.catalog import Brand, Line, Product
from liquido.domain.user import RequestStatus, ServiceType
from liquido.services.admin_service import ALL, AdminService, user_whatsapp_url
from liquido.services.catalog_service import (
    CatalogNotFoundError,
    CatalogService,
    CatalogUnavailableError,
    CatalogValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


# Pydantic models
class BrandBody(BaseModel):
    name: str = Field(..., min_length=1)
    logo_url: str = ""
    website: str = ""
    description: str = ""
    lines: Optional[List[Line]] = Field(None, description="Omit to keep the brand's current lines")


class LineBody(BaseModel):
    name: str = Field(..., min_length=1)
    image_url: str = ""
    products: Optional[List[Product]] = Field(None, description="Omit to keep the line's current products")


class StatusUpdate(BaseModel):
    status: RequestStatus


def _fail(action: str, e: Exception) -> HTTPException:
    if isinstance(e, CatalogNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, CatalogUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, CatalogValidationError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, FirebaseError):
        logger.error(f"Firebase error {action}: {e}")
        return HTTPException(status_code=502, detail=f"Firebase error {action}: {str(e)}")
    logger.error(f"Error {action}: {e}")
    return HTTPException(status_code=500, detail=f"Error {action}: {str(e)}")


# =============================================================================
# Catalog
# =============================================================================

@router.put("/catalog/sections/{section_id}/brands")
async def save_brand(
    section_id: str,
    body: BrandBody,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create a brand or replace the one with the same name"""
    try:
        lines = body.lines
        if lines is None:
            section = await service.get_section(section_id)
            existing = section.find_brand(body.name) if section else None
            lines = existing.lines if existing else []

        brand = Brand(
            name=body.name,
            logo_url=body.logo_url,
            website=body.website,
            description=body.description,
            lines=lines
        )
        await service.save_brand(section_id, brand)
        return {"status": "success", "data": brand.model_dump()}
    except Exception as e:
        raise _fail("saving brand", e)


@router.delete("/catalog/sections/{section_id}/brands/{brand_name}")
async def delete_brand(
    section_id: str,
    brand_name: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        await service.delete_brand(section_id, brand_name)
        return {"status": "success", "message": f"Brand {brand_name} deleted"}
    except Exception as e:
        raise _fail("deleting brand", e)


@router.put("/catalog/sections/{section_id}/brands/{brand_name}/lines")
async def save_product_line(
    section_id: str,
    brand_name: str,
    body: LineBody,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create a line (and its brand when missing) or replace the one with the same name"""
    try:
        products = body.products
        if products is None:
            section = await service.get_section(section_id)
            brand = section.find_brand(brand_name) if section else None
            existing = brand.find_line(body.name) if brand else None
            products = existing.products if existing else []

        line = Line(name=body.name, image_url=body.image_url, products=products)
        await service.save_product_line(section_id, brand_name, line)
        return {"status": "success", "data": line.model_dump()}
    except Exception as e:
        raise _fail("saving product line", e)


@router.delete("/catalog/sections/{section_id}/brands/{brand_name}/lines/{line_name}")
async def delete_product_line(
    section_id: str,
    brand_name: str,
    line_name: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        await service.delete_product_line(section_id, brand_name, line_name)
        return {"status": "success", "message": f"Line {line_name} deleted"}
    except Exception as e:
        raise _fail("deleting product line", e)


@router.put("/catalog/sections/{section_id}/brands/{brand_name}/lines/{line_name}/products")
async def save_product(
    section_id: str,
    brand_name: str,
    line_name: str,
    product: Product,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create or replace a product; id defaults to the slug of its name"""
    try:
        product_id = await service.save_product(section_id, brand_name, line_name, product)
        return {"status": "success", "data": {"id": product_id, **product.to_dict()}}
    except Exception as e:
        raise _fail("saving product", e)


@router.delete("/catalog/sections/{section_id}/brands/{brand_name}/lines/{line_name}/products/{product_id}")
async def delete_product(
    section_id: str,
    brand_name: str,
    line_name: str,
    product_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        await service.delete_product(section_id, brand_name, line_name, product_id)
        return {"status": "success", "message": f"Product {product_id} deleted"}
    except Exception as e:
        raise _fail("deleting product", e)


# =============================================================================
# Orders
# =============================================================================

@router.get("/orders")
async def get_orders(
    search: str = Query("", description="Product name, user name, email or date"),
    status: str = Query(ALL, description="Status or 'all'"),
    service: AdminService = Depends(get_admin_service)
):
    """All customer orders, newest first"""
    try:
        orders = await service.list_orders()
        filtered = service.filter_orders(orders, search, status)
        return {
            "status": "success",
            "data": [o.to_dict() for o in filtered],
            "count": len(filtered),
            "total": len(orders)
        }
    except Exception as e:
        raise _fail("fetching orders", e)


@router.patch("/orders/{user_id}/{order_id}/status")
async def update_order_status(
    user_id: str,
    order_id: str,
    body: StatusUpdate,
    service: AdminService = Depends(get_admin_service)
):
    """Overwrite only the order's status field"""
    try:
        await service.update_order_status(user_id, order_id, body.status)
        return {"status": "success", "data": {"orderId": order_id, "status": body.status.value}}
    except Exception as e:
        raise _fail("updating order status", e)


# =============================================================================
# Service requests
# =============================================================================

@router.get("/services")
async def get_services(
    search: str = Query("", description="User name, email, type, message or description"),
    type: str = Query(ALL, description="product-request, maintenance-request or 'all'"),
    status: str = Query(ALL, description="Status or 'all'"),
    service: AdminService = Depends(get_admin_service)
):
    try:
        services = await service.list_services()
        filtered = service.filter_services(services, search, type, status)
        return {
            "status": "success",
            "data": [s.to_dict() for s in filtered],
            "count": len(filtered),
            "total": len(services)
        }
    except Exception as e:
        raise _fail("fetching services", e)


@router.patch("/services/{user_id}/{service_type}/{service_id}/status")
async def update_service_status(
    user_id: str,
    service_type: ServiceType,
    service_id: str,
    body: StatusUpdate,
    service: AdminService = Depends(get_admin_service)
):
    try:
        await service.update_service_status(user_id, service_type, service_id, body.status)
        return {"status": "success", "data": {"serviceId": service_id, "status": body.status.value}}
    except Exception as e:
        raise _fail("updating service status", e)


# =============================================================================
# Users
# =============================================================================

@router.get("/users")
async def get_users(
    q: str = Query("", description="Name, email or phone"),
    service: AdminService = Depends(get_admin_service)
):
    """Registered users, newest first, with a WhatsApp chat link"""
    try:
        users = await service.list_users()
        filtered = service.filter_users(users, q)
        data = [
            {**u.to_dict(), "whatsappUrl": user_whatsapp_url(u.phone, u.name) if u.phone else None}
            for u in filtered
        ]
        return {"status": "success", "data": data, "count": len(data), "total": len(users)}
    except Exception as e:
        raise _fail("fetching users", e)


# =============================================================================
# Dashboard
# =============================================================================

@router.get("/dashboard/stats")
async def get_dashboard_stats(service: AdminService = Depends(get_admin_service)):
    try:
        return {"status": "success", "data": await service.get_dashboard_stats()}
    except Exception as e:
        raise _fail("fetching dashboard stats", e)


@router.get("/me")
async def whoami(user: TokenUser = Depends(require_admin)):
    return {"status": "success", "data": user.model_dump()}
