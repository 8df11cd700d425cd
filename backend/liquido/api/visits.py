"""
Visits API
Visit tracking for storefront pages and the admin counters
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from liquido.core.auth import TokenUser, require_admin
from liquido.core.dependencies import get_visits_service
from liquido.services.visits_service import VisitsService

router = APIRouter()


class VisitRequest(BaseModel):
    page: str = "/"
    referrer: Optional[str] = None


@router.post("")
async def record_visit(
    body: VisitRequest,
    request: Request,
    service: VisitsService = Depends(get_visits_service)
):
    """Record a page visit; tracking failures are reported, never raised"""
    visit = await service.record_visit(
        page=body.page,
        user_agent=request.headers.get("user-agent", ""),
        referrer=body.referrer
    )
    return {"status": "success" if visit else "skipped", "data": visit}


@router.get("/total")
async def get_total_visits(service: VisitsService = Depends(get_visits_service)):
    return {"status": "success", "data": {"totalVisits": await service.get_total_visits()}}


@router.get("")
async def get_visits(
    start_date: date,
    end_date: date,
    service: VisitsService = Depends(get_visits_service),
    user: TokenUser = Depends(require_admin)
):
    """Visits between two dates (inclusive)"""
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    visits = await service.get_visits_by_date_range(start_date.isoformat(), end_date.isoformat())
    return {"status": "success", "data": visits, "count": len(visits)}
