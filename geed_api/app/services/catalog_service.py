"""
Service layer for the services catalog.

Public clients see only active services; administrators create,
update and delete them.  The ``created_by`` reference is expanded to a
``{id, name, email}`` summary on the way out.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import RecordNotFound
from ..schemas.common import UserSummary
from ..schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from ..stores import DataStore, Page


logger = logging.getLogger(__name__)


class CatalogService:
    """Service class for managing catalog entries."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    async def _summaries(self, user_ids: List[Optional[str]]) -> Dict[str, UserSummary]:
        summaries: Dict[str, UserSummary] = {}
        for user_id in user_ids:
            if not user_id or user_id in summaries:
                continue
            user = await self.store.find_user_by_id(user_id)
            if user:
                summaries[user_id] = UserSummary(id=user["id"], name=user.get("name"), email=user.get("email"))
            else:
                summaries[user_id] = UserSummary(id=str(user_id))
        return summaries

    async def _to_read(self, records: List[Dict[str, Any]]) -> List[ServiceRead]:
        summaries = await self._summaries([r.get("created_by") for r in records])
        result = []
        for record in records:
            data = dict(record)
            data["created_by"] = summaries.get(record.get("created_by"))
            result.append(ServiceRead.model_validate(data))
        return result

    async def list_services(
        self,
        page: int,
        limit: int,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page:
        """Return a page of active services with ``ServiceRead`` items."""
        result = await self.store.get_all_services(page=page, limit=limit, category=category, search=search)
        result.items = await self._to_read(result.items)
        return result

    async def get_public_service(self, service_id: str) -> ServiceRead:
        service = await self.store.get_service_by_id(service_id)
        if service is None or not service.get("is_active", True):
            raise RecordNotFound(f"Service {service_id} not found")
        return (await self._to_read([service]))[0]

    async def create_service(self, data: ServiceCreate, actor: Dict[str, Any]) -> ServiceRead:
        record = data.model_dump()
        record["created_by"] = actor["id"]
        service = await self.store.create_service(record)
        logger.info("Created service %s (%s) by %s", service["id"], service["title"], actor["id"])
        return (await self._to_read([service]))[0]

    async def update_service(self, service_id: str, data: ServiceUpdate) -> ServiceRead:
        """Apply the provided fields; ``RecordNotFound`` if the service does not exist."""
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if updates:
            service = await self.store.update_service(service_id, updates)
        else:
            service = await self.store.get_service_by_id(service_id)
        if service is None:
            raise RecordNotFound(f"Service {service_id} not found")
        logger.info("Updated service %s", service_id)
        return (await self._to_read([service]))[0]

    async def delete_service(self, service_id: str) -> None:
        deleted = await self.store.delete_service(service_id)
        if deleted is None:
            raise RecordNotFound(f"Service {service_id} not found")
        logger.info("Deleted service %s", service_id)
