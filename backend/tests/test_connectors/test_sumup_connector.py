"""
Unit tests for SumUpConnector

Upstream calls go through an httpx.MockTransport; nothing leaves the process.
"""
import asyncio
import json

import httpx
import pytest

from liquido.connectors.sumup_connector import (
    SumUpAPIError,
    SumUpConfigError,
    SumUpConnector,
)


def make_connector(handler, merchant_code=""):
    return SumUpConnector(
        base_url="https://api.sumup.test",
        bearer_token="sup_sk_test",
        merchant_code=merchant_code,
        transport=httpx.MockTransport(handler)
    )


class TestSumUpConnector:
    """Test SumUpConnector requests and error mapping"""

    def test_missing_token_raises_config_error(self):
        """Test connector refuses to start without a bearer token"""
        with pytest.raises(SumUpConfigError) as exc_info:
            SumUpConnector(bearer_token="")

        assert "SUMUP_BEARER_TOKEN" in str(exc_info.value)

    def test_transactions_use_me_endpoint_and_auth_header(self):
        """Test transaction history without merchant code hits /me and sends the token"""
        # Arrange
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"items": [{"id": "tx-1"}]})

        connector = make_connector(handler)

        # Act
        result = asyncio.run(connector.get_transactions({"limit": 10, "order": "descending", "status": None}))

        # Assert
        assert result == {"items": [{"id": "tx-1"}]}
        assert seen["path"] == "/v0.1/me/transactions"
        assert seen["auth"] == "Bearer sup_sk_test"
        assert seen["params"] == {"limit": "10", "order": "descending"}

    def test_transactions_use_merchant_endpoint(self):
        """Test merchant code switches to the merchant-scoped path"""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            return httpx.Response(200, json=[])

        connector = make_connector(handler, merchant_code="MC123")

        asyncio.run(connector.get_transactions())

        assert seen["path"] == "/v0.1/merchants/MC123/transactions"

    def test_checkout_lookup_path(self):
        """Test single checkout lookup"""
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            return httpx.Response(200, json={"id": "co-9", "status": "PAID"})

        result = asyncio.run(make_connector(handler).get_checkout("co-9"))

        assert seen["path"] == "/v0.1/checkouts/co-9"
        assert result["status"] == "PAID"

    def test_error_uses_upstream_title_and_status(self):
        """Test upstream error body becomes message, status and details"""
        body = {"title": "Transaction not found", "status": 404}

        def handler(request):
            return httpx.Response(404, json=body)

        with pytest.raises(SumUpAPIError) as exc_info:
            asyncio.run(make_connector(handler).get_transaction("missing"))

        error = exc_info.value
        assert error.message == "Transaction not found"
        assert error.status_code == 404
        assert error.details == body
        assert error.method == "getTransaction"

    def test_error_falls_back_to_message_field(self):
        def handler(request):
            return httpx.Response(401, json={"message": "Invalid token"})

        with pytest.raises(SumUpAPIError) as exc_info:
            asyncio.run(make_connector(handler).get_checkouts())

        assert exc_info.value.message == "Invalid token"
        assert exc_info.value.status_code == 401

    def test_error_without_json_body(self):
        """Test non-JSON error keeps the raw text as details"""
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(SumUpAPIError) as exc_info:
            asyncio.run(make_connector(handler).get_checkouts())

        assert exc_info.value.message == "SumUp API returned status 502"
        assert exc_info.value.details == "Bad Gateway"

    def test_network_error_has_no_status(self):
        """Test transport failures are reported without an upstream status"""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SumUpAPIError) as exc_info:
            asyncio.run(make_connector(handler).get_transactions())

        assert exc_info.value.status_code is None
        assert exc_info.value.message == "Network error: No response from SumUp API"

    def test_payload_is_returned_unchanged(self):
        payload = {"items": [{"id": "tx-1", "amount": 12.5, "extra": {"nested": True}}], "links": []}

        def handler(request):
            return httpx.Response(200, content=json.dumps(payload), headers={"Content-Type": "application/json"})

        assert asyncio.run(make_connector(handler).get_transactions()) == payload

    def test_non_json_success_body(self):
        """Test a 2xx body that is not JSON is reported as a SumUpAPIError"""
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(SumUpAPIError) as exc_info:
            asyncio.run(make_connector(handler).get_checkouts())

        assert exc_info.value.message == "Invalid response from SumUp API"
        assert exc_info.value.details == "<html>maintenance</html>"
