"""
SumUp API Endpoints
Read-only proxy for transactions and checkouts, plus the transaction table
rows the back-office embeds

Responses use the {success, data} / {success, error, details} envelope and
pass the upstream status code through on failure.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from liquido import renderers
from liquido.connectors.sumup_connector import SumUpAPIError, SumUpConnector
from liquido.core.dependencies import get_sumup_connector

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(message: str, status_code: Optional[int] = None, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code or 500,
        content={"success": False, "error": message, "details": details}
    )


def _from_api_error(e: SumUpAPIError, fallback: str) -> JSONResponse:
    return error_response(e.message or fallback, e.status_code, e.details)


@router.get("/transactions")
async def get_transactions(
    limit: Optional[int] = None,
    order: Optional[str] = None,
    status: Optional[str] = None,
    payment_type: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    connector: SumUpConnector = Depends(get_sumup_connector)
):
    """Transaction history; query params are forwarded as-is"""
    try:
        transactions = await connector.get_transactions({
            "limit": limit,
            "order": order,
            "status": status,
            "payment_type": payment_type,
            "start_date": start_date,
            "end_date": end_date,
        })
        return {"success": True, "data": transactions}
    except SumUpAPIError as e:
        logger.error(f"Error fetching transactions: {e}")
        return _from_api_error(e, "Failed to fetch transactions")


@router.get("/transactions/{transaction_id}")
async def get_transaction(transaction_id: str, connector: SumUpConnector = Depends(get_sumup_connector)):
    try:
        transaction = await connector.get_transaction(transaction_id)
        return {"success": True, "data": transaction}
    except SumUpAPIError as e:
        logger.error(f"Error fetching transaction: {e}")
        return _from_api_error(e, "Failed to fetch transaction")


@router.get("/checkouts")
async def get_checkouts(
    limit: Optional[int] = None,
    order: Optional[str] = None,
    status: Optional[str] = None,
    connector: SumUpConnector = Depends(get_sumup_connector)
):
    try:
        checkouts = await connector.get_checkouts({"limit": limit, "order": order, "status": status})
        return {"success": True, "data": checkouts}
    except SumUpAPIError as e:
        logger.error(f"Error fetching checkouts: {e}")
        return _from_api_error(e, "Failed to fetch checkouts")


@router.get("/checkouts/{checkout_id}")
async def get_checkout(checkout_id: str, connector: SumUpConnector = Depends(get_sumup_connector)):
    try:
        checkout = await connector.get_checkout(checkout_id)
        return {"success": True, "data": checkout}
    except SumUpAPIError as e:
        logger.error(f"Error fetching checkout: {e}")
        return _from_api_error(e, "Failed to fetch checkout")


@router.get("/render/transactions", response_class=HTMLResponse)
async def render_transactions(
    limit: Optional[int] = None,
    order: Optional[str] = None,
    status: Optional[str] = None,
    connector: SumUpConnector = Depends(get_sumup_connector)
):
    """Transaction table rows for the back-office; errors keep the JSON envelope"""
    try:
        transactions = await connector.get_transactions({"limit": limit, "order": order, "status": status})
        return renderers.render_transaction_rows(transactions)
    except SumUpAPIError as e:
        logger.error(f"Error rendering transactions: {e}")
        return _from_api_error(e, "Failed to fetch transactions")
