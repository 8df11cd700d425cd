"""
Firebase Authentication Connector
Email/password accounts through the Identity Toolkit REST API
"""
import logging
from typing import Any, Dict

import httpx

from liquido.core.config import get_settings

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class FirebaseAuthError(Exception):
    """
    Identity provider rejected the call

    code is the provider's error code (e.g. 'EMAIL_EXISTS'), without the
    optional ' : explanation' suffix the API appends.
    """

    def __init__(self, code: str, message: str = None, status_code: int = None):
        super().__init__(message or code)
        self.code = code
        self.status_code = status_code


class FirebaseAuthConnector:
    """Connector for the Identity Toolkit accounts endpoints"""

    def __init__(self, api_key: str = None, timeout: float = None, transport: httpx.AsyncBaseTransport = None):
        settings = get_settings()
        self.api_key = api_key or settings.FIREBASE_API_KEY
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

        if not self.api_key:
            raise ValueError("Firebase auth not configured. Set FIREBASE_API_KEY")

    async def _call(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{IDENTITY_TOOLKIT_URL}/accounts:{endpoint}",
                    params={"key": self.api_key},
                    json=payload,
                )
            except httpx.HTTPError as e:
                logger.error(f"Identity Toolkit {endpoint} network error: {e}")
                raise FirebaseAuthError("NETWORK_REQUEST_FAILED", str(e)) from e

        try:
            data = response.json() if response.content else {}
        except ValueError:
            logger.error(f"Identity Toolkit {endpoint} returned a non-JSON body: status={response.status_code}")
            raise FirebaseAuthError("INVALID_RESPONSE", response.text, status_code=response.status_code)
        if response.status_code >= 400:
            raw = (data.get("error") or {}).get("message", "UNKNOWN_ERROR")
            code = raw.split(" : ")[0].strip()
            logger.warning(f"Identity Toolkit {endpoint} rejected request: {raw}")
            raise FirebaseAuthError(code, raw, status_code=response.status_code)
        return data

    async def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """Create an account; returns idToken, localId, email, refreshToken, expiresIn"""
        return await self._call("signUp", {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        })

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Password sign-in; same response shape as sign_up"""
        return await self._call("signInWithPassword", {
            "email": email,
            "password": password,
            "returnSecureToken": True,
        })

    async def lookup(self, id_token: str) -> Dict[str, Any]:
        """Resolve an ID token to its account record"""
        data = await self._call("lookup", {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            raise FirebaseAuthError("USER_NOT_FOUND")
        return users[0]
