"""
LIQUIDO - Backend API
Storefront and back-office backend for the LIQUIDO vape shop
"""
import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from liquido.api import admin, auth, catalog, components, customer, sumup, uploads, visits
from liquido.api.sumup import error_response
from liquido.connectors.sumup_connector import SumUpConfigError
from liquido.core.config import get_settings
from liquido.core.dependencies import get_catalog_service

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(sumup.router, prefix="/api/sumup", tags=["SumUp"])
app.include_router(catalog.router, prefix="/api/v1/catalog", tags=["Catalog"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(customer.router, prefix="/api/v1/services", tags=["Customer Services"])
app.include_router(uploads.router, prefix="/api/v1/uploads", tags=["Uploads"])
app.include_router(visits.router, prefix="/api/v1/visits", tags=["Visits"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(components.router, prefix="/components", tags=["Components"])


@app.exception_handler(SumUpConfigError)
async def sumup_config_error_handler(request: Request, exc: SumUpConfigError):
    logger.error(f"SumUp proxy unavailable: {exc}")
    return error_response(str(exc), 500)


@app.exception_handler(StarletteHTTPException)
async def api_not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown /api/... routes get a JSON error instead of the default body"""
    if exc.status_code == 404 and exc.detail == "Not Found" and request.url.path.startswith("/api/"):
        return JSONResponse(status_code=404, content={"error": "API endpoint not found"})
    return await http_exception_handler(request, exc)


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": "LIQUIDO API",
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/api/health")
async def health():
    return {"status": "ok", "message": "LIQUIDO server is running"}


@app.get("/api/v1/status")
async def api_status():
    """Which integrations are configured"""
    return {
        "catalog": {"source": get_catalog_service().source},
        "integrations": {
            "firebase_database": bool(settings.FIREBASE_DATABASE_URL),
            "firebase_auth": bool(settings.FIREBASE_API_KEY),
            "cloudinary": bool(settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_UPLOAD_PRESET),
            "sumup": bool(settings.SUMUP_BEARER_TOKEN)
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("liquido.main:app", host=settings.API_HOST, port=settings.PORT)
