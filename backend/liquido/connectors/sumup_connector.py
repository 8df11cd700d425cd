"""
SumUp REST Connector
Read-only access to transactions and checkouts

Every request carries 'Authorization: Bearer <SUMUP_BEARER_TOKEN>' and
uses a fixed 30 second timeout.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from liquido.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class SumUpConfigError(Exception):
    """Connector cannot be used with the current environment"""


class SumUpAPIError(Exception):
    """
    SumUp call failed

    status_code is the upstream HTTP status (None for network errors),
    details the decoded upstream body when there was one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None, method: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.method = method


class SumUpConnector:
    """
    Connector for the SumUp REST API

    Handles:
    - Transaction history (merchant-scoped when a merchant code is set)
    - Single transaction lookup
    - Checkout listing and lookup
    """

    def __init__(
        self,
        base_url: str = None,
        bearer_token: str = None,
        merchant_code: str = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Initialize SumUp connector

        Args:
            base_url: API root, defaults to SUMUP_BASE_URL
            bearer_token: API key / access token, defaults to SUMUP_BEARER_TOKEN
            merchant_code: Merchant code, defaults to SUMUP_MERCHANT_CODE
            transport: Optional httpx transport (used by tests)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.SUMUP_BASE_URL).rstrip("/")
        self.bearer_token = bearer_token if bearer_token is not None else settings.SUMUP_BEARER_TOKEN
        self.merchant_code = merchant_code if merchant_code is not None else settings.SUMUP_MERCHANT_CODE
        self._transport = transport

        if not self.bearer_token:
            raise SumUpConfigError(
                "SumUp bearer token not configured. Set SUMUP_BEARER_TOKEN in the environment or .env file"
            )

        self.headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.bearer_token}'
        }

    async def _get(self, endpoint: str, params: Dict = None, method: str = None) -> Any:
        """Execute a GET and return the decoded payload unchanged"""
        query = {k: v for k, v in (params or {}).items() if v is not None}

        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=DEFAULT_TIMEOUT,
            transport=self._transport
        ) as client:
            try:
                response = await client.get(endpoint, params=query)
            except httpx.HTTPError as e:
                logger.error(f"SumUp API Network Error ({method}): {e}")
                raise SumUpAPIError("Network error: No response from SumUp API", method=method) from e

        if response.status_code >= 400:
            raise self._handle_error(response, method)

        try:
            return response.json()
        except ValueError:
            logger.error(f"SumUp API returned a non-JSON body ({method}): status={response.status_code}")
            raise SumUpAPIError(
                "Invalid response from SumUp API",
                details=response.text or None,
                method=method
            )

    @staticmethod
    def _handle_error(response: httpx.Response, method: str) -> SumUpAPIError:
        """Build an error from an upstream error response"""
        try:
            data = response.json()
        except ValueError:
            data = response.text or None

        message = None
        if isinstance(data, dict):
            message = data.get('title') or data.get('message')
        if not message:
            message = f"SumUp API returned status {response.status_code}"

        logger.error(
            f"SumUp API Error ({method}): status={response.status_code} message={message} details={data}"
        )
        return SumUpAPIError(message, status_code=response.status_code, details=data, method=method)

    async def get_transactions(self, params: Dict = None) -> Any:
        """
        Get list of transactions

        Args:
            params: limit, order, status, payment_type, start_date, end_date

        Returns:
            Upstream payload
        """
        if self.merchant_code:
            endpoint = f"/v0.1/merchants/{self.merchant_code}/transactions"
        else:
            endpoint = "/v0.1/me/transactions"
        return await self._get(endpoint, params, method="getTransactions")

    async def get_transaction(self, transaction_id: str) -> Any:
        """Get a specific transaction by ID"""
        return await self._get(f"/v0.1/me/transactions/{transaction_id}", method="getTransaction")

    async def get_checkouts(self, params: Dict = None) -> Any:
        """
        Get list of checkouts

        Args:
            params: limit, order, status
        """
        return await self._get("/v0.1/checkouts", params, method="getCheckouts")

    async def get_checkout(self, checkout_id: str) -> Any:
        """Get a specific checkout by ID"""
        return await self._get(f"/v0.1/checkouts/{checkout_id}", method="getCheckout")
