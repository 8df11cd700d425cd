"""
API tests for the public catalog endpoints, served from the JSON fallback
"""
import pytest

from liquido.core.dependencies import get_catalog_service
from liquido.services.catalog_service import CatalogService


@pytest.fixture
def catalog_client(app, client, catalog_json_path):
    service = CatalogService(None, catalog_json_path)
    app.dependency_overrides[get_catalog_service] = lambda: service
    return client


class TestCatalogAPI:
    """Test catalog JSON endpoints"""

    def test_get_sections(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/sections")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["source"] == "json"
        assert body["count"] == 2

    def test_unknown_section_is_404(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/sections/accessori")

        assert response.status_code == 404

    def test_brand_by_name_case_insensitive(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/brands/dinner lady")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Dinner Lady"

    def test_brands_search(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/brands", params={"q": "vapo"})

        assert [b["name"] for b in response.json()["data"]] == ["Vaporesso"]

    def test_brands_with_lines_not_shadowed_by_name_route(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/brands/with-lines")

        assert [b["name"] for b in response.json()["data"]] == ["Dinner Lady", "Vaporesso"]

    def test_product_detail(self, catalog_client):
        """Test product lookup by section, brand, line and id"""
        response = catalog_client.get(
            "/api/v1/catalog/sections/liquidi/brands/Dinner Lady/lines/Ice Series/products/lemon-tart-ice"
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Lemon Tart Ice"
        assert data["lineImage"] == "https://cdn.example.com/ice.png"

    def test_missing_product_is_404(self, catalog_client):
        response = catalog_client.get(
            "/api/v1/catalog/sections/liquidi/brands/Dinner Lady/lines/Ice Series/products/nope"
        )

        assert response.status_code == 404

    def test_product_search(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/products", params={"q": "limone"})

        assert [p["id"] for p in response.json()["data"]] == ["lemon-tart-ice"]

    def test_unreadable_catalog_is_503(self, app, client, tmp_path):
        service = CatalogService(None, str(tmp_path / "missing.json"))
        app.dependency_overrides[get_catalog_service] = lambda: service

        response = client.get("/api/v1/catalog/sections")

        assert response.status_code == 503


class TestCatalogFragments:
    """Test HTML fragment endpoints"""

    def test_render_section_brands(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/render/brands", params={"section_id": "liquidi"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Dinner Lady" in response.text
        assert "Pod Salt" in response.text

    def test_render_lines_for_unknown_brand(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/render/lines", params={"brand": "Elf Bar"})

        assert "Nessun prodotto disponibile per Elf Bar." in response.text

    def test_render_products(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/render/products", params={
            "section_id": "liquidi",
            "brand": "Dinner Lady",
            "line": "Ice Series",
        })

        assert "Lemon Tart Ice" in response.text

    def test_seo_for_faq(self, catalog_client):
        response = catalog_client.get("/api/v1/catalog/seo", params={"page": "/faq.html"})

        assert [s["@type"] for s in response.json()["data"]] == ["Organization", "FAQPage"]
