"""
Components API
Serves the shared HTML partials (header, footer, top nav) from the in-memory cache
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from liquido.core.auth import TokenUser, require_admin
from liquido.core.dependencies import get_component_loader
from liquido.renderers import ComponentLoader, ComponentNotFoundError

router = APIRouter()


@router.get("/{component_path:path}", response_class=HTMLResponse)
async def get_component(component_path: str, loader: ComponentLoader = Depends(get_component_loader)):
    try:
        return loader.load(component_path)
    except ComponentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/cache")
async def clear_component_cache(
    path: Optional[str] = None,
    loader: ComponentLoader = Depends(get_component_loader),
    user: TokenUser = Depends(require_admin)
):
    """Drop one cached partial (path=...) or the whole cache"""
    loader.clear_cache(path)
    return {"status": "success", "cleared": path or "all"}
