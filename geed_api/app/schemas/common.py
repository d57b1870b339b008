"""Models shared by several domains."""

from typing import List, Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    """Reference to a user as embedded in services and contacts."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None
