"""
Authentication endpoints for API v1.

Registration and login return a bearer token together with the user.
Tokens are stateless, so logout only acknowledges the request; the
client discards its token.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from geed_api.app.core.security import create_access_token, get_current_user
from geed_api.app.schemas.common import MessageResponse
from geed_api.app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from geed_api.app.services.user_service import UserService

from ..deps import get_user_service

router = APIRouter()


def _issue_token(user: Dict[str, Any]) -> str:
    return create_access_token({"sub": user["id"], "role": user.get("role", "user")})


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    users: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Create a regular user account and log it in."""
    user = await users.register(payload)
    return AuthResponse(token=_issue_token(user), user=users.to_read(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> AuthResponse:
    """Exchange e‑mail and password for a token.

    Wrong credentials and disabled accounts both yield HTTP 401.
    """
    user = await users.authenticate(payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.get("is_active", True):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is deactivated")
    return AuthResponse(token=_issue_token(user), user=users.to_read(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(current_user: dict = Depends(get_current_user)) -> MessageResponse:
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(current_user: dict = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse(user=UserService.to_read(current_user))
