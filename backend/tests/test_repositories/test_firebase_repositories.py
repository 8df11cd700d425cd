"""
Unit tests for CatalogRepository, UserRepository and StatsRepository

These tests run against the in-memory database from conftest; no network.
"""
import asyncio

from conftest import FIXED_SERVER_TIME, InMemoryFirebase
from liquido.domain.catalog import Section
from liquido.domain.user import RequestStatus, ServiceType
from liquido.repositories import CatalogRepository, StatsRepository, UserRepository


class TestCatalogRepository:
    """Test CatalogRepository reads and section writes"""

    def test_get_sections_returns_domain_models(self, firebase):
        """Test sections are parsed into Section models"""
        # Act
        sections = asyncio.run(CatalogRepository(firebase).get_sections())

        # Assert
        assert [s.id for s in sections] == ["liquidi", "dispositivi"]
        assert isinstance(sections[0], Section)
        assert sections[0].brands[0].lines[0].products[0].id == "lemon-tart-ice"

    def test_section_nodes_keyed_by_list_index(self, firebase):
        nodes = asyncio.run(CatalogRepository(firebase).get_section_nodes())

        assert [(key, s.id) for key, s in nodes] == [("0", "liquidi"), ("1", "dispositivi")]

    def test_section_nodes_keyed_by_object_key(self, sample_sections):
        """Test object-shaped nodes keep their own child keys"""
        db = InMemoryFirebase({"catalog": {"sections": {"a": sample_sections[0], "b": sample_sections[1]}}})

        nodes = asyncio.run(CatalogRepository(db).get_section_nodes())

        assert [key for key, _ in nodes] == ["a", "b"]

    def test_malformed_section_is_skipped(self, sample_sections):
        """Test a node that is not a section does not hide the others"""
        db = InMemoryFirebase({"catalog": {"sections": [sample_sections[0], "garbage", sample_sections[1]]}})

        nodes = asyncio.run(CatalogRepository(db).get_section_nodes())

        assert [(key, s.id) for key, s in nodes] == [("0", "liquidi"), ("2", "dispositivi")]

    def test_empty_catalog(self):
        assert asyncio.run(CatalogRepository(InMemoryFirebase()).get_sections()) == []

    def test_save_section_writes_single_node(self, firebase):
        """Test only catalog/sections/<key> is written"""
        repo = CatalogRepository(firebase)
        section = Section(id="liquidi", name="Liquidi", brands=[])

        asyncio.run(repo.save_section("0", section))

        assert firebase.writes == [("set", "catalog/sections/0", {"id": "liquidi", "name": "Liquidi", "brands": []})]
        assert firebase.data["catalog"]["sections"][1]["id"] == "dispositivi"

    def test_products_stored_keyed_by_id(self, firebase):
        repo = CatalogRepository(firebase)
        sections = asyncio.run(repo.get_sections())

        asyncio.run(repo.save_section("0", sections[0]))

        line = firebase.writes[0][2]["brands"][0]["lines"][0]
        assert list(line["products"].keys()) == ["lemon-tart-ice"]


class TestUserRepository:
    """Test UserRepository writes"""

    def test_save_profile_uses_server_timestamp(self):
        db = InMemoryFirebase()

        asyncio.run(UserRepository(db).save_profile("u1", name="Mario", email="m@x.it", phone="347"))

        assert db.data["users"]["u1"] == {
            "name": "Mario",
            "email": "m@x.it",
            "phone": "347",
            "createdAt": FIXED_SERVER_TIME,
        }

    def test_get_profile_missing_returns_none(self):
        assert asyncio.run(UserRepository(InMemoryFirebase()).get_profile("nobody")) is None

    def test_add_service_request_is_pending(self):
        """Test service requests are pushed under services/<type>s as pending"""
        db = InMemoryFirebase()

        request_id = asyncio.run(UserRepository(db).add_service_request(
            "u1", ServiceType.MAINTENANCE_REQUEST, {"date": "2030-01-01", "time": "10:00"}
        ))

        stored = db.data["users"]["u1"]["services"]["maintenance-requests"][request_id]
        assert stored["status"] == "pending"
        assert stored["createdAt"] == FIXED_SERVER_TIME

    def test_update_order_status_patches_status_only(self):
        """Test status change writes nothing but the status field"""
        # Arrange
        db = InMemoryFirebase({"users": {"u1": {"orders": {"o1": {
            "productName": "Lemon Tart Ice",
            "date": "2030-01-01",
            "status": "pending",
        }}}}})

        # Act
        asyncio.run(UserRepository(db).update_order_status("u1", "o1", RequestStatus.COMPLETED))

        # Assert
        assert db.writes == [("update", "users/u1/orders/o1", {"status": "completed"})]
        assert db.data["users"]["u1"]["orders"]["o1"] == {
            "productName": "Lemon Tart Ice",
            "date": "2030-01-01",
            "status": "completed",
        }

    def test_update_service_status_path(self):
        db = InMemoryFirebase()

        asyncio.run(UserRepository(db).update_service_status(
            "u1", ServiceType.PRODUCT_REQUEST, "s1", RequestStatus.CANCELLED
        ))

        assert db.writes == [("update", "users/u1/services/product-requests/s1", {"status": "cancelled"})]


class TestStatsRepository:
    def test_total_visits_defaults_to_zero(self):
        assert asyncio.run(StatsRepository(InMemoryFirebase()).get_total_visits()) == 0

    def test_set_daily(self):
        db = InMemoryFirebase()

        asyncio.run(StatsRepository(db).set_daily("2030-01-01", 3, 123))

        assert db.data["dailyStats"]["2030-01-01"] == {"date": "2030-01-01", "count": 3, "lastUpdated": 123}
