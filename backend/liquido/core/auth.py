"""
Request authentication for the LIQUIDO backend

Bearer tokens are Firebase ID tokens. They are resolved through the
identity provider on every request; accounts whose verified email appears
in ADMIN_EMAILS act as admins.
"""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from liquido.core.config import get_settings
from liquido.core.dependencies import get_auth_service
from liquido.services.auth_service import AuthError, AuthService

security = HTTPBearer(auto_error=False)

# higher level includes the lower ones
ROLE_HIERARCHY = {
    "admin": 2,
    "user": 1,
}


class TokenUser(BaseModel):
    """Signed-in account behind the request"""
    id: str
    email: str
    name: Optional[str] = None
    role: str = "user"


def role_for_email(email: str, email_verified: bool = False) -> str:
    """Admin only for a verified address listed in ADMIN_EMAILS"""
    if email_verified and email and email.lower() in get_settings().get_admin_emails():
        return "admin"
    return "user"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenUser:
    """
    Resolve the bearer token to a TokenUser

    Raises 401 when the header is missing or the provider rejects the token.
    """
    if not credentials:
        raise _unauthorized("Authentication required")

    try:
        account = await auth_service.verify_token(credentials.credentials)
    except AuthError as e:
        raise _unauthorized(e.message)

    return TokenUser(
        id=account["uid"],
        email=account["email"],
        name=account.get("name"),
        role=role_for_email(account["email"], account.get("emailVerified", False))
    )


def require_role(required_role: str):
    """
    Build a dependency that lets through users at or above required_role

        @router.get("/orders")
        async def list_orders(user: TokenUser = Depends(require_role("admin"))):
            ...
    """
    required_level = ROLE_HIERARCHY.get(required_role, 0)

    async def check_role(user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if ROLE_HIERARCHY.get(user.role, 0) < required_level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {required_role}, your role: {user.role}"
            )
        return user

    return check_role


require_admin = require_role("admin")
