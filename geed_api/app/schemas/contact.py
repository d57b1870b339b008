"""
Pydantic schemas for contact inquiries.

Inquiries are submitted through the public contact form and triaged by
administrators.  ``status`` moves from ``new`` to ``read`` when an
admin opens the inquiry, to ``replied`` when an admin answers it, and
may be set explicitly (e.g. ``closed``) through the status endpoint.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .common import UserSummary

ContactStatus = Literal["new", "read", "replied", "closed"]
ContactPriority = Literal["low", "medium", "high"]


class ContactCreate(BaseModel):
    """Payload of the public contact form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=50, examples=["Jo Lee"])
    email: EmailStr = Field(..., examples=["jo@example.com"])
    phone: Optional[str] = Field(None, max_length=20)
    subject: str = Field(..., min_length=5, max_length=100)
    message: str = Field(..., min_length=10, max_length=1000)


class ContactStatusUpdate(BaseModel):
    status: ContactStatus
    priority: Optional[ContactPriority] = None
    assigned_to: Optional[str] = Field(None, description="ID of the user handling the inquiry")


class ContactReplyRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., min_length=10, max_length=1000)


class ContactReply(BaseModel):
    message: str
    replied_by: Optional[UserSummary] = None
    replied_at: Optional[datetime] = None


class ContactRead(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: ContactStatus = "new"
    priority: ContactPriority = "medium"
    assigned_to: Optional[UserSummary] = None
    reply: Optional[ContactReply] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContactSummary(BaseModel):
    """What the submitter gets back after sending the form."""

    id: str
    name: str
    email: str
    subject: str
    created_at: Optional[datetime] = None


class ContactCreatedResponse(BaseModel):
    success: bool = True
    message: str
    contact: ContactSummary


class ContactResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    contact: ContactRead


class ContactListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    status_counts: Dict[str, int]
    contacts: List[ContactRead]
