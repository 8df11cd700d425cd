"""
Auth Service
Email/password sign-up and sign-in against the identity provider, with the
user profile kept under users/<uid>

Provider error codes are translated into the Italian messages shown by the
storefront.
"""
import logging
from typing import Any, Dict

from liquido.connectors.firebase_auth_connector import FirebaseAuthConnector, FirebaseAuthError
from liquido.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Si è verificato un errore. Riprova."

# provider code -> (user-facing message, HTTP status)
AUTH_ERRORS = {
    "EMAIL_EXISTS": ("Questa email è già registrata.", 409),
    "INVALID_EMAIL": ("Indirizzo email non valido.", 400),
    "OPERATION_NOT_ALLOWED": ("Operazione non consentita.", 403),
    "WEAK_PASSWORD": ("La password è troppo debole. Usa almeno 6 caratteri.", 400),
    "USER_DISABLED": ("Questo account è stato disabilitato.", 403),
    "EMAIL_NOT_FOUND": ("Nessun account trovato con questa email.", 404),
    "USER_NOT_FOUND": ("Nessun account trovato con questa email.", 404),
    "INVALID_PASSWORD": ("Password errata.", 401),
    "INVALID_LOGIN_CREDENTIALS": ("Password errata.", 401),
    "TOO_MANY_ATTEMPTS_TRY_LATER": ("Troppi tentativi. Riprova più tardi.", 429),
}


class AuthError(Exception):
    """Authentication failure carrying the provider code and a display message"""

    def __init__(self, code: str, message: str, status_code: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_provider(cls, error: FirebaseAuthError) -> "AuthError":
        message, status_code = AUTH_ERRORS.get(error.code, (DEFAULT_ERROR_MESSAGE, 400))
        return cls(error.code, message, status_code)


class AuthService:
    """Account creation, sign-in and ID token verification"""

    def __init__(self, auth_connector: FirebaseAuthConnector, users: UserRepository):
        self.auth_connector = auth_connector
        self.users = users

    @staticmethod
    def _session(account: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "uid": account["localId"],
            "email": account.get("email"),
            "idToken": account.get("idToken"),
            "refreshToken": account.get("refreshToken"),
            "expiresIn": account.get("expiresIn"),
        }

    async def sign_up(self, email: str, password: str, name: str, phone: str) -> Dict[str, Any]:
        """
        Create the account and store its profile

        Returns:
            Session dict (uid, email, idToken, refreshToken, expiresIn) plus name and phone
        """
        try:
            account = await self.auth_connector.sign_up(email, password)
        except FirebaseAuthError as e:
            logger.warning(f"Sign-up failed for {email}: {e.code}")
            raise AuthError.from_provider(e) from e

        session = self._session(account)
        await self.users.save_profile(session["uid"], name=name, email=email, phone=phone)
        logger.info(f"Created account {session['uid']}")
        return {**session, "name": name, "phone": phone}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Password sign-in; the stored profile fields are merged into the session"""
        try:
            account = await self.auth_connector.sign_in(email, password)
        except FirebaseAuthError as e:
            logger.warning(f"Sign-in failed for {email}: {e.code}")
            raise AuthError.from_provider(e) from e

        session = self._session(account)
        profile = await self.users.get_profile(session["uid"])
        if profile:
            session.update(name=profile.name, phone=profile.phone)
        return session

    async def verify_token(self, id_token: str) -> Dict[str, Any]:
        """
        Resolve an ID token to the signed-in account

        Returns:
            {"uid", "email", "name", "emailVerified"}
        """
        try:
            account = await self.auth_connector.lookup(id_token)
        except FirebaseAuthError as e:
            raise AuthError(e.code, "Token non valido o scaduto.", 401) from e

        return {
            "uid": account["localId"],
            "email": account.get("email", ""),
            "name": account.get("displayName"),
            "emailVerified": account.get("emailVerified") is True,
        }

    async def get_profile(self, uid: str) -> Dict[str, Any]:
        profile = await self.users.get_profile(uid)
        return profile.to_dict() if profile else {"uid": uid}
