"""
Contact inbox endpoints for API v1.

``POST /`` is the public contact form.  Everything else is restricted
to administrators: listing with status counts, opening an inquiry
(which marks a new one as read), triage, replying and deletion.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from geed_api.app.core.errors import RecordNotFound, not_found
from geed_api.app.core.security import require_roles
from geed_api.app.schemas.common import MessageResponse
from geed_api.app.schemas.contact import (
    ContactCreate,
    ContactCreatedResponse,
    ContactListResponse,
    ContactPriority,
    ContactReplyRequest,
    ContactResponse,
    ContactStatus,
    ContactStatusUpdate,
    ContactSummary,
)
from geed_api.app.services.contact_service import ContactService

from ..deps import get_contact_service

router = APIRouter()


@router.post("", response_model=ContactCreatedResponse, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    payload: ContactCreate,
    request: Request,
    contacts: ContactService = Depends(get_contact_service),
) -> ContactCreatedResponse:
    """Store a contact form submission with status ``new``."""
    contact = await contacts.submit(
        payload,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return ContactCreatedResponse(
        message="Your message has been sent successfully. We will get back to you soon!",
        contact=ContactSummary.model_validate(contact),
    )


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    priority: Optional[ContactPriority] = Query(None),
    current_user: dict = Depends(require_roles("admin")),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactListResponse:
    """Newest inquiries first; ``status_counts`` covers the whole inbox."""
    result = await contacts.list_contacts(page, limit, status=status_filter, priority=priority)
    return ContactListResponse(
        count=len(result.items),
        total=result.total,
        page=result.page,
        pages=result.pages,
        status_counts=result.status_counts,
        contacts=result.items,
    )


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: str,
    current_user: dict = Depends(require_roles("admin")),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    try:
        contact = await contacts.open_contact(contact_id)
    except RecordNotFound:
        raise not_found("Contact message")
    return ContactResponse(contact=contact)


@router.put("/{contact_id}/status", response_model=ContactResponse)
async def update_contact_status(
    contact_id: str,
    payload: ContactStatusUpdate,
    current_user: dict = Depends(require_roles("admin")),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Set status and optionally priority and assignee."""
    try:
        contact = await contacts.update_status(contact_id, payload)
    except RecordNotFound:
        raise not_found("Contact message")
    return ContactResponse(message="Contact message updated successfully", contact=contact)


@router.post("/{contact_id}/reply", response_model=ContactResponse)
async def reply_to_contact(
    contact_id: str,
    payload: ContactReplyRequest,
    current_user: dict = Depends(require_roles("admin")),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    try:
        contact = await contacts.reply(contact_id, payload.message, current_user)
    except RecordNotFound:
        raise not_found("Contact message")
    return ContactResponse(message="Reply sent successfully", contact=contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: str,
    current_user: dict = Depends(require_roles("admin")),
    contacts: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    try:
        await contacts.delete_contact(contact_id)
    except RecordNotFound:
        raise not_found("Contact message")
    return MessageResponse(message="Contact message deleted successfully")
