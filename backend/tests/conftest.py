"""
Pytest fixtures and configuration for LIQUIDO backend tests

Shared fixtures: an in-memory stand-in for the Realtime Database connector,
sample catalog payloads, and a FastAPI TestClient with dependency overrides
cleared after every test.
"""
import copy
import json

import pytest
from fastapi.testclient import TestClient

from liquido.connectors.firebase_connector import SERVER_TIMESTAMP
from liquido.core.auth import TokenUser, get_current_user

FIXED_SERVER_TIME = 1700000000000


class InMemoryFirebase:
    """
    Realtime Database double with the FirebaseConnector interface

    Data is a plain nested dict/list tree. Every write is recorded in
    `writes` as (method, path, payload) so tests can assert on exactly what
    was sent.
    """

    def __init__(self, data=None):
        self.data = copy.deepcopy(data) if data is not None else {}
        self.writes = []
        self._push_counter = 0

    @staticmethod
    def _parts(path):
        return [p for p in path.split("/") if p]

    @staticmethod
    def _resolve_timestamps(value):
        if value == SERVER_TIMESTAMP:
            return FIXED_SERVER_TIME
        if isinstance(value, dict):
            return {k: InMemoryFirebase._resolve_timestamps(v) for k, v in value.items()}
        if isinstance(value, list):
            return [InMemoryFirebase._resolve_timestamps(v) for v in value]
        return value

    @staticmethod
    def _child(node, key):
        if isinstance(node, list):
            index = int(key)
            return node[index] if index < len(node) else None
        if isinstance(node, dict):
            return node.get(key)
        return None

    def _container(self, parts):
        node = self.data
        for key in parts:
            child = self._child(node, key)
            if child is None:
                child = {}
                self._assign(node, key, child)
            node = child
        return node

    @staticmethod
    def _assign(node, key, value):
        if isinstance(node, list):
            node[int(key)] = value
        else:
            node[key] = value

    async def get(self, path):
        node = self.data
        for key in self._parts(path):
            node = self._child(node, key)
            if node is None:
                return None
        return copy.deepcopy(node)

    async def set(self, path, value):
        self.writes.append(("set", path, copy.deepcopy(value)))
        parts = self._parts(path)
        if not parts:
            self.data = self._resolve_timestamps(value)
            return
        parent = self._container(parts[:-1])
        self._assign(parent, parts[-1], self._resolve_timestamps(copy.deepcopy(value)))

    async def update(self, path, value):
        self.writes.append(("update", path, copy.deepcopy(value)))
        node = self._container(self._parts(path))
        node.update(self._resolve_timestamps(copy.deepcopy(value)))

    async def push(self, path, value):
        self._push_counter += 1
        key = f"-Npush{self._push_counter}"
        self.writes.append(("push", path, copy.deepcopy(value)))
        parent = self._container(self._parts(path))
        parent[key] = self._resolve_timestamps(copy.deepcopy(value))
        return key

    async def delete(self, path):
        self.writes.append(("delete", path, None))
        parts = self._parts(path)
        parent = self._container(parts[:-1])
        if isinstance(parent, dict):
            parent.pop(parts[-1], None)


@pytest.fixture
def sample_sections():
    """
    Two sections as stored under catalog/sections

    'liquidi' has two brands (one with lines), 'dispositivi' has one.
    """
    return [
        {
            "id": "liquidi",
            "name": "Liquidi",
            "brands": [
                {
                    "name": "Dinner Lady",
                    "logo_url": "https://cdn.example.com/dl.png",
                    "website": "https://dinnerlady.com",
                    "description": "",
                    "lines": [
                        {
                            "name": "Ice Series",
                            "image_url": "https://cdn.example.com/ice.png",
                            "products": {
                                "lemon-tart-ice": {
                                    "id": "lemon-tart-ice",
                                    "name": "Lemon Tart Ice",
                                    "description": "Crostata al limone",
                                    "flavorProfile": "Dolce",
                                    "imageUrl": "",
                                    "images": ["https://cdn.example.com/lt.png"]
                                }
                            }
                        }
                    ]
                },
                {
                    "name": "Pod Salt",
                    "logo_url": "",
                    "website": "https://podsalt.com",
                    "description": ""
                }
            ]
        },
        {
            "id": "dispositivi",
            "name": "Dispositivi",
            "brands": [
                {
                    "name": "Vaporesso",
                    "logo_url": "",
                    "website": "",
                    "description": "",
                    "lines": [{"name": "XROS", "image_url": ""}]
                }
            ]
        }
    ]


@pytest.fixture
def firebase(sample_sections):
    """In-memory database seeded with the sample catalog"""
    return InMemoryFirebase({"catalog": {"sections": sample_sections}})


@pytest.fixture
def catalog_json_path(tmp_path, sample_sections):
    """Fallback JSON file with the sample catalog"""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"catalog": {"sections": sample_sections}}), encoding="utf-8")
    return str(path)


@pytest.fixture
def admin_user():
    return TokenUser(id="admin-uid", email="admin@liquido.it", name="Admin", role="admin")


@pytest.fixture
def customer_user():
    return TokenUser(id="user-1", email="mario@example.com", name="Mario", role="user")


@pytest.fixture
def app():
    from liquido.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def as_user(app):
    """Call with a TokenUser to authenticate every request as that user"""
    def _login(user):
        app.dependency_overrides[get_current_user] = lambda: user
    return _login
