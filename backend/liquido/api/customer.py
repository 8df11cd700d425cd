"""
Customer Services API Endpoints
MyLiquido requests for signed-in customers; every response carries the
WhatsApp link the storefront opens next
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from liquido.core.auth import TokenUser, get_current_user
from liquido.core.dependencies import get_customer_service
from liquido.services.customer_service import CustomerService, ServiceRequestError

logger = logging.getLogger(__name__)

router = APIRouter()


class ProductRequestBody(BaseModel):
    image_url: str = Field(..., description="Uploaded reference image (secure_url)")
    message: str = Field(..., min_length=1)


class MaintenanceRequestBody(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD, today or later")
    time: str = Field(..., description="HH:MM (24h)")
    description: str = ""


class OrderRequestBody(BaseModel):
    product_name: Optional[str] = None
    product_description: Optional[str] = None
    product_details: Dict[str, Any] = Field(default_factory=dict)
    date: str = Field(..., description="Pickup date")
    time: str = Field(..., description="Pickup time")


def _request_error(e: ServiceRequestError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/product-request")
async def request_special_product(
    body: ProductRequestBody,
    user: TokenUser = Depends(get_current_user),
    service: CustomerService = Depends(get_customer_service)
):
    """Special product request (image + message)"""
    try:
        profile = await service.get_profile(user.id, user.email)
        result = await service.request_special_product(user.id, body.image_url, body.message, profile)
        return {"status": "success", "data": result}
    except ServiceRequestError as e:
        raise _request_error(e)
    except Exception as e:
        logger.error(f"Error requesting special product: {e}")
        raise HTTPException(status_code=500, detail=f"Error requesting special product: {str(e)}")


@router.post("/maintenance-request")
async def request_maintenance(
    body: MaintenanceRequestBody,
    user: TokenUser = Depends(get_current_user),
    service: CustomerService = Depends(get_customer_service)
):
    """Maintenance booking"""
    try:
        profile = await service.get_profile(user.id, user.email)
        result = await service.request_maintenance(user.id, body.date, body.time, body.description, profile)
        return {"status": "success", "data": result}
    except ServiceRequestError as e:
        raise _request_error(e)
    except Exception as e:
        logger.error(f"Error requesting maintenance: {e}")
        raise HTTPException(status_code=500, detail=f"Error requesting maintenance: {str(e)}")


@router.post("/orders")
async def create_order(
    body: OrderRequestBody,
    user: TokenUser = Depends(get_current_user),
    service: CustomerService = Depends(get_customer_service)
):
    """Loyal-customer pickup order"""
    try:
        profile = await service.get_profile(user.id, user.email)
        product = {
            "name": body.product_name,
            "description": body.product_description,
            "details": body.product_details,
        }
        result = await service.create_order(user.id, product, body.date, body.time, profile)
        return {"status": "success", "data": result}
    except ServiceRequestError as e:
        raise _request_error(e)
    except Exception as e:
        logger.error(f"Error creating order: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating order: {str(e)}")
