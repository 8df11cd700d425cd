"""
Auth API Endpoints
Customer sign-up and sign-in; returns the identity provider session
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from liquido.core.auth import TokenUser, get_current_user
from liquido.core.dependencies import get_auth_service
from liquido.services.auth_service import AuthError, AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


class SignUpRequest(BaseModel):
    email: str
    password: str
    name: str = Field(..., min_length=1)
    phone: str = ""


class SignInRequest(BaseModel):
    email: str
    password: str


def _auth_error(e: AuthError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail={"code": e.code, "message": e.message})


@router.post("/signup")
async def sign_up(request: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    """Create an account and store the profile under users/<uid>"""
    try:
        session = await service.sign_up(request.email, request.password, request.name, request.phone)
        return {"status": "success", "data": session}
    except AuthError as e:
        raise _auth_error(e)
    except Exception as e:
        logger.error(f"Error signing up: {e}")
        raise HTTPException(status_code=500, detail=f"Error signing up: {str(e)}")


@router.post("/signin")
async def sign_in(request: SignInRequest, service: AuthService = Depends(get_auth_service)):
    try:
        session = await service.sign_in(request.email, request.password)
        return {"status": "success", "data": session}
    except AuthError as e:
        raise _auth_error(e)
    except Exception as e:
        logger.error(f"Error signing in: {e}")
        raise HTTPException(status_code=500, detail=f"Error signing in: {str(e)}")


@router.get("/me")
async def get_me(
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """Current user with stored profile fields and role"""
    try:
        profile = await service.get_profile(user.id)
        return {"status": "success", "data": {**profile, "email": user.email, "role": user.role}}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching profile: {str(e)}")
