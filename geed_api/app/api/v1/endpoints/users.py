"""
User endpoints for API v1.

Authenticated users can read their dashboard, edit their profile and
change their password.  Administrators can list, inspect, update and
delete any account.
"""

from fastapi import APIRouter, Depends, Query

from geed_api.app.core.errors import RecordNotFound, not_found
from geed_api.app.core.security import get_current_user, require_roles
from geed_api.app.schemas.common import MessageResponse
from geed_api.app.schemas.user import (
    ChangePasswordRequest,
    DashboardResponse,
    ProfileUpdate,
    UserAdminUpdate,
    UserListResponse,
    UserResponse,
)
from geed_api.app.services.user_service import UserService

from ..deps import get_user_service

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    current_user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> DashboardResponse:
    """Dashboard figures for the current user.

    Everybody sees the number of active services; administrators also
    get user and contact counts.
    """
    stats = await users.dashboard_stats(current_user)
    return DashboardResponse(user=users.to_read(current_user), stats=stats)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await users.update_profile(current_user["id"], payload)
    except RecordNotFound:
        raise not_found("User")
    return UserResponse(message="Profile updated successfully", user=users.to_read(user))


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    await users.change_password(current_user, payload)
    return MessageResponse(message="Password changed successfully")


@router.get("", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: dict = Depends(require_roles("admin")),
    users: UserService = Depends(get_user_service),
) -> UserListResponse:
    """Paginated list of all accounts, newest first (admin only)."""
    result = await users.list_users(page, limit)
    items = [users.to_read(item) for item in result.items]
    return UserListResponse(count=len(items), total=result.total, page=result.page, pages=result.pages, users=items)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: dict = Depends(require_roles("admin")),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await users.get_user(user_id)
    except RecordNotFound:
        raise not_found("User")
    return UserResponse(user=users.to_read(user))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    payload: UserAdminUpdate,
    current_user: dict = Depends(require_roles("admin")),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Change another account's name, role or activity flag (admin only)."""
    try:
        user = await users.admin_update(current_user, user_id, payload)
    except RecordNotFound:
        raise not_found("User")
    return UserResponse(message="User updated successfully", user=users.to_read(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current_user: dict = Depends(require_roles("admin")),
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    try:
        await users.delete_user(current_user, user_id)
    except RecordNotFound:
        raise not_found("User")
    return MessageResponse(message="User deleted successfully")
