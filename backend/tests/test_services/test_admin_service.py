"""
Unit tests for AdminService
"""
import asyncio

import pytest

from conftest import InMemoryFirebase
from liquido.domain.user import RequestStatus, ServiceType
from liquido.repositories import CatalogRepository, StatsRepository, UserRepository
from liquido.services.admin_service import (
    AdminService,
    format_phone_for_whatsapp,
    user_whatsapp_url,
)
from liquido.services.catalog_service import CatalogService

USERS = {
    "u1": {
        "name": "Mario Rossi",
        "email": "mario@example.com",
        "phone": "347 123 4567",
        "createdAt": 100,
        "orders": {
            "o1": {"productName": "XROS 4", "date": "2030-05-10", "time": "18:00",
                   "createdAt": 1000, "status": "pending"},
            "o2": {"productName": "Lemon Tart Ice", "date": "2030-05-12", "time": "10:00",
                   "createdAt": 3000, "status": "completed"},
        },
        "services": {
            "maintenance-requests": {
                "m1": {"date": "2030-05-11", "time": "10:00", "description": "Coil bruciata",
                       "createdAt": 2000, "status": "pending"},
            },
        },
    },
    "u2": {
        "name": "Giulia Bianchi",
        "email": "giulia@example.com",
        "createdAt": 200,
        "orders": {
            "o3": {"productName": "Aegis Legend", "date": "2030-06-01", "time": "12:00",
                   "createdAt": 2000, "status": "confirmed"},
        },
        "services": {
            "product-requests": {
                "p1": {"productImage": "https://img.example.com/a.png", "message": "Avete il Vinci?",
                       "createdAt": 4000, "status": "pending"},
            },
        },
    },
}


@pytest.fixture
def db(sample_sections):
    return InMemoryFirebase({
        "users": USERS,
        "catalog": {"sections": sample_sections},
        "stats": {"totalVisits": 42},
    })


@pytest.fixture
def admin(db, catalog_json_path):
    catalog = CatalogService(CatalogRepository(db), catalog_json_path)
    return AdminService(UserRepository(db), catalog, StatsRepository(db))


class TestPhoneFormatting:
    """Test WhatsApp phone normalization"""

    @pytest.mark.parametrize("phone,expected", [
        ("347 123 4567", "393471234567"),
        ("+39 347 123 4567", "393471234567"),
        ("06 1234 5678", "39612345678"),
        ("", ""),
    ])
    def test_format_phone(self, phone, expected):
        assert format_phone_for_whatsapp(phone) == expected

    def test_user_whatsapp_url(self):
        url = user_whatsapp_url("347 123 4567", "Mario")

        assert url.startswith("https://wa.me/393471234567?text=Hello%20Mario%2C%20this%20is%20LIQUIDO.")


class TestOrders:
    """Test order listing, filtering and status changes"""

    def test_list_orders_newest_first_with_user_fields(self, admin):
        # Act
        orders = asyncio.run(admin.list_orders())

        # Assert
        assert [o.orderId for o in orders] == ["o2", "o3", "o1"]
        assert orders[0].userName == "Mario Rossi"
        assert orders[1].userPhone == "N/A"

    def test_filter_by_search_and_status(self, admin):
        orders = asyncio.run(admin.list_orders())

        assert [o.orderId for o in admin.filter_orders(orders, "giulia")] == ["o3"]
        assert [o.orderId for o in admin.filter_orders(orders, "2030-05")] == ["o2", "o1"]
        assert [o.orderId for o in admin.filter_orders(orders, "", "pending")] == ["o1"]
        assert admin.filter_orders(orders, "mario", "confirmed") == []

    def test_update_order_status(self, admin, db):
        asyncio.run(admin.update_order_status("u1", "o1", RequestStatus.CONFIRMED))

        assert db.writes == [("update", "users/u1/orders/o1", {"status": "confirmed"})]
        assert db.data["users"]["u1"]["orders"]["o1"]["productName"] == "XROS 4"


class TestServices:
    """Test service request listing and filtering"""

    def test_list_services_merges_both_types(self, admin):
        services = asyncio.run(admin.list_services())

        assert [(s.serviceId, s.serviceType) for s in services] == [
            ("p1", ServiceType.PRODUCT_REQUEST),
            ("m1", ServiceType.MAINTENANCE_REQUEST),
        ]
        assert services[1].typeDisplay == "Maintenance Request"

    def test_filter_by_type_label_and_text(self, admin):
        services = asyncio.run(admin.list_services())

        assert [s.serviceId for s in admin.filter_services(services, "maintenance")] == ["m1"]
        assert [s.serviceId for s in admin.filter_services(services, "vinci")] == ["p1"]
        assert [s.serviceId for s in admin.filter_services(services, "", "product-request")] == ["p1"]
        assert admin.filter_services(services, "", "all", "completed") == []

    def test_update_service_status(self, admin, db):
        asyncio.run(admin.update_service_status("u2", ServiceType.PRODUCT_REQUEST, "p1", RequestStatus.COMPLETED))

        assert db.data["users"]["u2"]["services"]["product-requests"]["p1"]["status"] == "completed"


class TestUsersAndDashboard:
    def test_list_users_newest_first(self, admin):
        users = asyncio.run(admin.list_users())

        assert [u.uid for u in users] == ["u2", "u1"]
        assert [u.uid for u in admin.filter_users(users, "347")] == ["u1"]

    def test_dashboard_stats(self, admin):
        """Test dashboard counts sections, unique brands and lines"""
        stats = asyncio.run(admin.get_dashboard_stats())

        assert stats["sections"] == 2
        assert stats["brands"] == 3
        assert stats["products"] == 2
        assert stats["totalVisits"] == 42
        assert stats["source"] == "firebase"
        assert [b["name"] for b in stats["recentBrands"]] == ["Vaporesso", "Pod Salt", "Dinner Lady"]
        assert stats["recentBrands"][0]["linesCount"] == 1

    def test_dashboard_without_stats_repository(self, catalog_json_path):
        admin = AdminService(UserRepository(InMemoryFirebase()), CatalogService(None, catalog_json_path))

        stats = asyncio.run(admin.get_dashboard_stats())

        assert stats["totalVisits"] is None
        assert stats["source"] == "json"
