"""
Service layer for contact inquiries.

Anyone may submit an inquiry.  Administrators list, open, triage,
answer and delete them.  Opening an inquiry whose status is ``new``
marks it ``read``; answering it sets ``replied`` and records who
replied and when.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.errors import RecordNotFound, ValidationFailed
from ..schemas.common import UserSummary
from ..schemas.contact import ContactCreate, ContactRead, ContactStatusUpdate
from ..stores import ContactPage, DataStore


logger = logging.getLogger(__name__)


class ContactService:
    """Service class for the contact inbox."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def _summary(self, user_id: Optional[str], cache: Dict[str, UserSummary]) -> Optional[UserSummary]:
        if not user_id:
            return None
        if user_id not in cache:
            user = await self.store.find_user_by_id(user_id)
            cache[user_id] = (
                UserSummary(id=user["id"], name=user.get("name"), email=user.get("email"))
                if user
                else UserSummary(id=str(user_id))
            )
        return cache[user_id]

    async def _to_read(self, records: List[Dict[str, Any]]) -> List[ContactRead]:
        cache: Dict[str, UserSummary] = {}
        result = []
        for record in records:
            data = dict(record)
            data["assigned_to"] = await self._summary(record.get("assigned_to"), cache)
            if record.get("reply"):
                reply = dict(record["reply"])
                reply["replied_by"] = await self._summary(reply.get("replied_by"), cache)
                data["reply"] = reply
            result.append(ContactRead.model_validate(data))
        return result

    async def submit(
        self,
        data: ContactCreate,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Dict[str, Any]:
        record = data.model_dump()
        record["email"] = record["email"].lower()
        record["ip_address"] = ip_address
        record["user_agent"] = user_agent
        contact = await self.store.create_contact(record)
        logger.info("Contact %s submitted by %s", contact["id"], contact["email"])
        return contact

    async def list_contacts(
        self,
        page: int,
        limit: int,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> ContactPage:
        result = await self.store.get_all_contacts(page=page, limit=limit, status=status, priority=priority)
        result.items = await self._to_read(result.items)
        return result

    async def open_contact(self, contact_id: str) -> ContactRead:
        """Fetch an inquiry for an administrator, marking a ``new`` one as ``read``."""
        contact = await self.store.get_contact_by_id(contact_id)
        if contact is None:
            raise RecordNotFound(f"Contact {contact_id} not found")
        if contact.get("status") == "new":
            contact = await self.store.update_contact(contact_id, {"status": "read"})
        return (await self._to_read([contact]))[0]

    async def update_status(self, contact_id: str, data: ContactStatusUpdate) -> ContactRead:
        if await self.store.get_contact_by_id(contact_id) is None:
            raise RecordNotFound(f"Contact {contact_id} not found")
        updates = data.model_dump(exclude_none=True)
        if data.assigned_to is not None and await self.store.find_user_by_id(data.assigned_to) is None:
            raise ValidationFailed("Invalid user ID", field="assigned_to")
        contact = await self.store.update_contact(contact_id, updates)
        if contact is None:
            raise RecordNotFound(f"Contact {contact_id} not found")
        logger.info("Contact %s set to %s", contact_id, updates)
        return (await self._to_read([contact]))[0]

    async def reply(self, contact_id: str, message: str, actor: Dict[str, Any]) -> ContactRead:
        contact = await self.store.update_contact(
            contact_id,
            {
                "status": "replied",
                "reply": {
                    "message": message,
                    "replied_by": actor["id"],
                    "replied_at": datetime.now(timezone.utc),
                },
            },
        )
        if contact is None:
            raise RecordNotFound(f"Contact {contact_id} not found")
        logger.info("Contact %s replied by %s", contact_id, actor["id"])
        return (await self._to_read([contact]))[0]

    async def delete_contact(self, contact_id: str) -> None:
        deleted = await self.store.delete_contact(contact_id)
        if deleted is None:
            raise RecordNotFound(f"Contact {contact_id} not found")
        logger.info("Deleted contact %s", contact_id)
