"""
Firebase Realtime Database Connector
Handles all reads/writes against the Realtime Database REST API

Paths are relative to the database root (e.g. 'catalog/sections',
'users/<uid>/orders'). Every call maps to one HTTP request:
GET (read), PUT (set), PATCH (update), POST (push), DELETE (remove).
"""
import logging
from typing import Any, Dict, Optional

import httpx

from liquido.core.config import get_settings

logger = logging.getLogger(__name__)

# Placeholder resolved by the database to its own clock (ms since epoch)
SERVER_TIMESTAMP = {".sv": "timestamp"}


class FirebaseError(Exception):
    """Raised when the Realtime Database rejects a request or is unreachable"""

    def __init__(self, message: str, status_code: Optional[int] = None, path: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class FirebaseConnector:
    """
    Connector for the Firebase Realtime Database REST API

    Handles:
    - Reading any node of the tree
    - Whole-node overwrites and partial updates
    - Pushing children with database-generated keys
    """

    def __init__(
        self,
        database_url: str = None,
        secret: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """
        Initialize Realtime Database connector

        Args:
            database_url: Database root (e.g. 'https://liquido-default-rtdb.firebaseio.com')
            secret: Database secret or service token sent as the 'auth' query param
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        settings = get_settings()
        self.database_url = (database_url or settings.FIREBASE_DATABASE_URL or "").rstrip("/")
        self.secret = secret if secret is not None else settings.FIREBASE_DATABASE_SECRET
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

        if not self.database_url:
            raise ValueError("Firebase database not configured. Set FIREBASE_DATABASE_URL")

    def _url(self, path: str) -> str:
        path = path.strip("/")
        return f"{self.database_url}/{path}.json" if path else f"{self.database_url}/.json"

    def _params(self) -> Dict[str, str]:
        return {"auth": self.secret} if self.secret else {}

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        """Execute a request and return the decoded JSON body"""
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.request(
                    method,
                    self._url(path),
                    params=self._params(),
                    json=payload if method in ("PUT", "PATCH", "POST") else None,
                )
            except httpx.HTTPError as e:
                logger.error(f"Firebase {method} {path} failed: {e}")
                raise FirebaseError(f"Firebase request failed: {e}", path=path) from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            logger.error(f"Firebase {method} {path} returned {response.status_code}: {message}")
            raise FirebaseError(str(message), status_code=response.status_code, path=path)

        if not response.content:
            return None
        return response.json()

    async def get(self, path: str) -> Any:
        """Read a node; returns None when it does not exist"""
        return await self._request("GET", path)

    async def set(self, path: str, value: Any) -> Any:
        """Overwrite a node with value"""
        return await self._request("PUT", path, value)

    async def update(self, path: str, values: Dict[str, Any]) -> Any:
        """Write only the given children of a node"""
        return await self._request("PATCH", path, values)

    async def push(self, path: str, value: Any) -> str:
        """
        Append a child with a generated key

        Returns:
            The new child key
        """
        result = await self._request("POST", path, value)
        return result["name"]

    async def delete(self, path: str) -> None:
        """Remove a node"""
        await self._request("DELETE", path)
