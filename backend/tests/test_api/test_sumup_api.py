"""
API tests for the SumUp proxy endpoints
"""
import httpx

from liquido.connectors.sumup_connector import SumUpConnector
from liquido.core.dependencies import get_sumup_connector


def use_upstream(app, handler):
    """Route the proxy to a mocked SumUp API"""
    app.dependency_overrides[get_sumup_connector] = lambda: SumUpConnector(
        base_url="https://api.sumup.test",
        bearer_token="sup_sk_test",
        merchant_code="",
        transport=httpx.MockTransport(handler)
    )


class TestSumUpProxy:
    """Test envelope, passthrough and error mapping"""

    def test_transactions_payload_passed_through(self, app, client):
        """Test the upstream payload is wrapped unchanged"""
        # Arrange
        payload = {"items": [{"id": "tx-1", "amount": 12.5, "currency": "EUR", "status": "SUCCESSFUL"}]}
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=payload)

        use_upstream(app, handler)

        # Act
        response = client.get("/api/sumup/transactions", params={"limit": 5, "order": "descending"})

        # Assert
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": payload}
        assert seen["params"] == {"limit": "5", "order": "descending"}

    def test_checkout_lookup(self, app, client):
        def handler(request):
            assert request.url.path == "/v0.1/checkouts/co-1"
            return httpx.Response(200, json={"id": "co-1", "status": "PENDING"})

        use_upstream(app, handler)

        response = client.get("/api/sumup/checkouts/co-1")

        assert response.json()["data"]["status"] == "PENDING"

    def test_upstream_status_passed_through(self, app, client):
        """Test an upstream 404 stays a 404 with the error envelope"""
        body = {"title": "Transaction not found"}

        def handler(request):
            return httpx.Response(404, json=body)

        use_upstream(app, handler)

        response = client.get("/api/sumup/transactions/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Transaction not found", "details": body}

    def test_network_error_is_500(self, app, client):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        use_upstream(app, handler)

        response = client.get("/api/sumup/checkouts")

        assert response.status_code == 500
        assert response.json()["success"] is False
        assert response.json()["details"] is None

    def test_unset_token_is_500(self, app, client):
        """Test missing configuration is reported with the error envelope"""
        app.dependency_overrides[get_sumup_connector] = lambda: SumUpConnector(bearer_token="")

        response = client.get("/api/sumup/transactions")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "SUMUP_BEARER_TOKEN" in body["error"]

    def test_non_json_upstream_body_keeps_envelope(self, app, client):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        use_upstream(app, handler)

        response = client.get("/api/sumup/transactions")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Invalid response from SumUp API",
            "details": "<html>maintenance</html>",
        }

    def test_render_transactions(self, app, client):
        def handler(request):
            assert request.url.path == "/v0.1/me/transactions"
            return httpx.Response(200, json=[{"id": "tx-1", "amount": 990, "currency": "EUR", "status": "PENDING"}])

        use_upstream(app, handler)

        response = client.get("/api/sumup/render/transactions")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "€9.90" in response.text
        assert 'data-transaction-id="tx-1"' in response.text
