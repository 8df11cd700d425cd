"""
Catalog API Endpoints
Public read access to sections, brands, lines and products, plus the HTML
fragments and JSON-LD the storefront pages embed
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from liquido.core.config import get_settings
from liquido.core.dependencies import get_catalog_service
from liquido import renderers
from liquido.services import seo_schema
from liquido.services.catalog_service import CatalogService, CatalogUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()


def _success(data, service: CatalogService, **extra):
    return {"status": "success", "data": data, "source": service.source, **extra}


def _fail(action: str, e: Exception) -> HTTPException:
    if isinstance(e, CatalogUnavailableError):
        return HTTPException(status_code=503, detail=str(e))
    logger.error(f"Error {action}: {e}")
    return HTTPException(status_code=500, detail=f"Error {action}: {str(e)}")


# =============================================================================
# Sections
# =============================================================================

@router.get("/sections")
async def get_sections(service: CatalogService = Depends(get_catalog_service)):
    """All sections with their brands, lines and products"""
    try:
        sections = await service.get_sections()
        return _success([s.model_dump() for s in sections], service, count=len(sections))
    except Exception as e:
        raise _fail("fetching sections", e)


@router.get("/sections/{section_id}")
async def get_section(section_id: str, service: CatalogService = Depends(get_catalog_service)):
    try:
        section = await service.get_section(section_id)
        if not section:
            raise HTTPException(status_code=404, detail=f"Section {section_id} not found")
        return _success(section.model_dump(), service)
    except HTTPException:
        raise
    except Exception as e:
        raise _fail("fetching section", e)


@router.get("/sections/{section_id}/brands")
async def get_section_brands(section_id: str, service: CatalogService = Depends(get_catalog_service)):
    try:
        brands = await service.get_brands_by_section(section_id)
        return _success([b.model_dump() for b in brands], service, count=len(brands))
    except Exception as e:
        raise _fail("fetching brands", e)


@router.get("/sections/{section_id}/lines")
async def get_section_lines(section_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Every line of the section, annotated with brandName and brandLogo"""
    try:
        lines = await service.get_all_lines_by_section(section_id)
        return _success(lines, service, count=len(lines))
    except Exception as e:
        raise _fail("fetching lines", e)


@router.get("/sections/{section_id}/products")
async def get_section_products(section_id: str, service: CatalogService = Depends(get_catalog_service)):
    try:
        products = await service.get_all_products_by_section(section_id)
        return _success(products, service, count=len(products))
    except Exception as e:
        raise _fail("fetching products", e)


@router.get("/sections/{section_id}/brands/{brand_name}/lines/{line_name}/products")
async def get_line_products(
    section_id: str,
    brand_name: str,
    line_name: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        products = await service.get_products_by_line(section_id, brand_name, line_name)
        return _success(products, service, count=len(products))
    except Exception as e:
        raise _fail("fetching products", e)


@router.get("/sections/{section_id}/brands/{brand_name}/lines/{line_name}/products/{product_id}")
async def get_product(
    section_id: str,
    brand_name: str,
    line_name: str,
    product_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        product = await service.get_product(section_id, brand_name, line_name, product_id)
        if not product:
            raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
        return _success(product, service)
    except HTTPException:
        raise
    except Exception as e:
        raise _fail("fetching product", e)


# =============================================================================
# Brands / lines / products across sections
# =============================================================================

@router.get("/brands")
async def get_brands(
    q: Optional[str] = Query(None, description="Case-insensitive brand name filter"),
    service: CatalogService = Depends(get_catalog_service)
):
    """All brands annotated with sectionId/sectionName"""
    try:
        brands = await service.search_brands(q) if q else await service.get_all_brands()
        return _success(brands, service, count=len(brands))
    except Exception as e:
        raise _fail("fetching brands", e)


@router.get("/brands/with-lines")
async def get_brands_with_lines(
    section_id: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        brands = await service.get_brands_with_lines(section_id)
        return _success(brands, service, count=len(brands))
    except Exception as e:
        raise _fail("fetching brands", e)


@router.get("/brands/{brand_name}")
async def get_brand(
    brand_name: str,
    section_id: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """Brand by name (case-insensitive), optionally within a section"""
    try:
        if section_id:
            brand = await service.get_brand_by_name_in_section(section_id, brand_name)
        else:
            brand = await service.get_brand_by_name(brand_name)
        if not brand:
            raise HTTPException(status_code=404, detail=f"Brand {brand_name} not found")
        return _success(brand.model_dump(), service)
    except HTTPException:
        raise
    except Exception as e:
        raise _fail("fetching brand", e)


@router.get("/brands/{brand_name}/lines")
async def get_brand_lines(
    brand_name: str,
    section_id: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        lines = await service.get_brand_lines(brand_name, section_id)
        return _success([line.model_dump() for line in lines], service, count=len(lines))
    except Exception as e:
        raise _fail("fetching lines", e)


@router.get("/lines")
async def get_lines(service: CatalogService = Depends(get_catalog_service)):
    try:
        lines = await service.get_all_lines()
        return _success(lines, service, count=len(lines))
    except Exception as e:
        raise _fail("fetching lines", e)


@router.get("/products")
async def get_products(
    q: Optional[str] = Query(None, description="Matches name, description, flavor, brand or line"),
    section_id: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        if q:
            products = await service.search_products(q, section_id)
        elif section_id:
            products = await service.get_all_products_by_section(section_id)
        else:
            products = await service.get_all_products()
        return _success(products, service, count=len(products))
    except Exception as e:
        raise _fail("fetching products", e)


# =============================================================================
# HTML fragments
# =============================================================================

@router.get("/render/brands", response_class=HTMLResponse)
async def render_brands(
    section_id: Optional[str] = None,
    q: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """Brands grid for a section, a search, or the whole catalog"""
    try:
        if section_id:
            section = await service.get_section(section_id)
            if not section:
                return HTMLResponse("<p>Sezione non trovata</p>", status_code=404)
            return renderers.render_brands_grid(section.brands, section.name)
        brands = await service.search_brands(q) if q else await service.get_all_brands()
        return renderers.render_brands_grid(brands)
    except Exception as e:
        raise _fail("rendering brands", e)


@router.get("/render/brands/{brand_name}/header", response_class=HTMLResponse)
async def render_brand_header(
    brand_name: str,
    section_id: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        if section_id:
            brand = await service.get_brand_by_name_in_section(section_id, brand_name)
        else:
            brand = await service.get_brand_by_name(brand_name)
        if not brand:
            raise HTTPException(status_code=404, detail=f"Brand {brand_name} not found")
        return renderers.render_brand_header(brand)
    except HTTPException:
        raise
    except Exception as e:
        raise _fail("rendering brand header", e)


@router.get("/render/lines", response_class=HTMLResponse)
async def render_lines(
    section_id: Optional[str] = None,
    brand: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """Line cards for a brand (optionally within a section) or for a whole section"""
    try:
        if brand:
            if section_id:
                found = await service.get_brand_by_name_in_section(section_id, brand)
            else:
                found = await service.get_brand_by_name(brand)
            lines = [
                {**line.model_dump(), "brandName": brand, "brandLogo": found.logo_url if found else ""}
                for line in (found.lines if found else [])
            ]
            return renderers.render_lines_grid(lines, f"Nessun prodotto disponibile per {brand}.")
        if section_id:
            lines = await service.get_all_lines_by_section(section_id)
        else:
            lines = await service.get_all_lines()
        return renderers.render_lines_grid(lines)
    except Exception as e:
        raise _fail("rendering lines", e)


@router.get("/render/products", response_class=HTMLResponse)
async def render_products(
    section_id: str,
    brand: str,
    line: str,
    service: CatalogService = Depends(get_catalog_service)
):
    try:
        products = await service.get_products_by_line(section_id, brand, line)
        return renderers.render_products_grid(products)
    except Exception as e:
        raise _fail("rendering products", e)


@router.get("/render/status-badge", response_class=HTMLResponse)
async def render_status_badge(status: Optional[str] = None):
    return renderers.render_status_badge(status)


# =============================================================================
# Structured data
# =============================================================================

@router.get("/seo")
async def get_structured_data(page: str = Query("index.html", description="Page path, e.g. /faq.html")):
    """JSON-LD documents to embed on the given page"""
    return {
        "status": "success",
        "data": seo_schema.schemas_for_page(page, get_settings().SITE_BASE_URL)
    }
