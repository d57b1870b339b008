"""
Business logic for users and authentication.

``UserService`` wraps the ``DataStore`` user operations with the
rules of the site: e‑mails are unique and lower‑cased, self‑registered
accounts always get the ``user`` role, and administrators cannot lock
themselves out (delete, deactivate or demote their own account).
"""

import logging
from typing import Any, Dict, Optional

from ..core.errors import RecordNotFound, ValidationFailed
from ..core.security import verify_password
from ..schemas.user import (
    ChangePasswordRequest,
    DashboardStats,
    ProfileUpdate,
    RegisterRequest,
    UserAdminUpdate,
    UserRead,
)
from ..stores import DataStore, Page


logger = logging.getLogger(__name__)


class UserService:
    """Service for working with user accounts."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    @staticmethod
    def to_read(record: Dict[str, Any]) -> UserRead:
        return UserRead.model_validate(record)

    async def register(self, data: RegisterRequest) -> Dict[str, Any]:
        """Create a ``user`` account; raises ``ValidationFailed`` if the e‑mail is taken."""
        email = data.email.lower()
        if await self.store.find_user_by_email(email):
            raise ValidationFailed("User already exists with this email", field="email")
        user = await self.store.create_user(
            {"name": data.name, "email": email, "password": data.password, "role": "user"}
        )
        logger.info("Registered user %s (%s)", user["id"], email)
        return user

    async def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the user record if the credentials match, otherwise ``None``.

        Disabled accounts are returned as well; the caller decides how
        to report them.
        """
        user = await self.store.find_user_by_email(email.lower())
        if user is None or not verify_password(password, user.get("password")):
            logger.info("Failed login for %s", email)
            return None
        return user

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise RecordNotFound(f"User {user_id} not found")
        return user

    async def list_users(self, page: int, limit: int) -> Page:
        return await self.store.get_all_users(page=page, limit=limit)

    async def update_profile(self, user_id: str, data: ProfileUpdate) -> Dict[str, Any]:
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if not updates:
            return await self.get_user(user_id)
        user = await self.store.update_user(user_id, updates)
        if user is None:
            raise RecordNotFound(f"User {user_id} not found")
        return user

    async def change_password(self, user: Dict[str, Any], data: ChangePasswordRequest) -> None:
        if not verify_password(data.current_password, user.get("password")):
            raise ValidationFailed("Current password is incorrect", field="current_password")
        await self.store.update_user(user["id"], {"password": data.new_password})
        logger.info("Password changed for user %s", user["id"])

    async def admin_update(self, actor: Dict[str, Any], user_id: str, data: UserAdminUpdate) -> Dict[str, Any]:
        """Update name, role or activity flag of any account (admin only)."""
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if actor["id"] == user_id:
            if updates.get("is_active") is False:
                raise ValidationFailed("You cannot deactivate your own account", field="is_active")
            if updates.get("role", "admin") != "admin":
                raise ValidationFailed("You cannot change your own role", field="role")
        if not updates:
            return await self.get_user(user_id)
        user = await self.store.update_user(user_id, updates)
        if user is None:
            raise RecordNotFound(f"User {user_id} not found")
        logger.info("User %s updated by %s: %s", user_id, actor["id"], sorted(updates))
        return user

    async def delete_user(self, actor: Dict[str, Any], user_id: str) -> None:
        if actor["id"] == user_id:
            raise ValidationFailed("You cannot delete your own account")
        deleted = await self.store.delete_user(user_id)
        if deleted is None:
            raise RecordNotFound(f"User {user_id} not found")
        logger.info("User %s deleted by %s", user_id, actor["id"])

    async def dashboard_stats(self, user: Dict[str, Any]) -> DashboardStats:
        """Counts shown on the dashboard; admin‑only figures are left empty for users."""
        stats = DashboardStats(total_services=await self.store.count_services())
        if user.get("role") == "admin":
            contacts = await self.store.get_all_contacts(page=1, limit=1)
            stats.total_users = await self.store.count_users()
            stats.total_contacts = sum(contacts.status_counts.values())
            stats.new_contacts = contacts.status_counts.get("new", 0)
        return stats
