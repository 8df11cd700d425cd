"""
Uploads API
Product reference images for special product requests, stored on Cloudinary
"""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from liquido.connectors.cloudinary_connector import (
    CloudinaryConnector,
    ImageValidationError,
    UploadError,
)
from liquido.core.auth import TokenUser, get_current_user
from liquido.core.dependencies import get_cloudinary_connector

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/product-image")
async def upload_product_image(
    file: UploadFile = File(...),
    user: TokenUser = Depends(get_current_user),
    connector: CloudinaryConnector = Depends(get_cloudinary_connector)
):
    """
    Upload a JPG/PNG/WEBP image (max 5MB) to product-requests/<uid>

    Returns:
        {"status": "success", "data": {"url": secure_url}}
    """
    try:
        content = await file.read()
        url = await connector.upload_image(
            filename=file.filename or "upload",
            content=content,
            content_type=file.content_type,
            folder=f"product-requests/{user.id}"
        )
        return {"status": "success", "data": {"url": url}}
    except ImageValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UploadError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Error uploading image: {e}")
        raise HTTPException(status_code=500, detail=f"Error uploading image: {str(e)}")
