"""
Pydantic models for users and authentication.

Password hashes are stored with the user record but no response model
declares a ``password`` field, so they are dropped on serialization.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

UserRole = Literal["user", "admin"]


class RegisterRequest(BaseModel):
    """Payload for self‑registration.  New accounts always get role ``user``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=50, examples=["Jo Lee"])
    email: EmailStr = Field(..., examples=["jo@example.com"])
    password: str = Field(..., min_length=6, examples=["strongpassword"])


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    company: Optional[str] = Field(None, max_length=100)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class UserAdminUpdate(BaseModel):
    """Fields an administrator may change on any account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str
    name: str
    email: str
    role: UserRole = "user"
    is_active: bool = True
    phone: Optional[str] = None
    company: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserRead


class UserResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    user: UserRead


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    users: List[UserRead]


class DashboardStats(BaseModel):
    total_services: int
    total_users: Optional[int] = None
    total_contacts: Optional[int] = None
    new_contacts: Optional[int] = None


class DashboardResponse(BaseModel):
    success: bool = True
    user: UserRead
    stats: DashboardStats
