"""
Data access facade over the MongoDB and in‑memory backends.

A ``DataStore`` is constructed explicitly by ``create_app`` and stored
on ``app.state.store``; routes receive it through the ``get_store``
dependency.  On first use the store calls its ``connect`` probe once:
a database handle selects ``MongoStore``, ``None`` selects a freshly
seeded ``MemoryStore``.  The choice is fixed for the lifetime of the
instance and every operation is forwarded unchanged to the selected
backend.  Backend errors propagate to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Union

from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from pymongo.database import Database

from ..core.db import connect_mongo
from .base import ContactPage, Page, Record
from .memory_store import MemoryStore
from .mongo_store import MongoStore


logger = logging.getLogger(__name__)

Backend = Union[MongoStore, MemoryStore]


class DataStore:
    """Single interface for user, service and contact persistence."""

    def __init__(self, connect: Optional[Callable[[], Optional[Database]]] = None) -> None:
        self._connect = connect or connect_mongo
        self._backend: Optional[Backend] = None
        self._lock: Optional[asyncio.Lock] = None
        self.initialized = False

    @property
    def use_memory_db(self) -> bool:
        return isinstance(self._backend, MemoryStore)

    @property
    def backend_name(self) -> Optional[str]:
        if not self.initialized:
            return None
        return "memory" if self.use_memory_db else "mongodb"

    async def initialize(self) -> None:
        """Select the backend.  Only the first call has any effect."""
        if self.initialized:
            return
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self.initialized:
                return
            # The ping and index creation block, keep them off the loop.
            db = await run_in_threadpool(self._connect)
            if db is not None:
                logger.info("Using MongoDB database %s", db.name)
                self._backend = await run_in_threadpool(MongoStore, db)
            else:
                logger.warning("MongoDB not available, using in-memory database")
                memory = MemoryStore()
                await memory.initialize_sample_data()
                self._backend = memory
            self.initialized = True

    async def _active(self) -> Backend:
        await self.initialize()
        return self._backend

    # users

    async def find_user_by_email(self, email: str) -> Optional[Record]:
        return await (await self._active()).find_user_by_email(email)

    async def find_user_by_id(self, user_id: Any) -> Optional[Record]:
        return await (await self._active()).find_user_by_id(user_id)

    async def create_user(self, data: Record) -> Record:
        return await (await self._active()).create_user(data)

    async def update_user(self, user_id: Any, update: Record) -> Optional[Record]:
        return await (await self._active()).update_user(user_id, update)

    async def delete_user(self, user_id: Any) -> Optional[Record]:
        return await (await self._active()).delete_user(user_id)

    async def get_all_users(self, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        return await (await self._active()).get_all_users(page=page, limit=limit)

    async def count_users(self) -> int:
        return await (await self._active()).count_users()

    # services

    async def get_all_services(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page:
        backend = await self._active()
        return await backend.get_all_services(page=page, limit=limit, category=category, search=search)

    async def count_services(self, active_only: bool = True) -> int:
        return await (await self._active()).count_services(active_only=active_only)

    async def get_service_by_id(self, service_id: Any) -> Optional[Record]:
        return await (await self._active()).get_service_by_id(service_id)

    async def create_service(self, data: Record) -> Record:
        return await (await self._active()).create_service(data)

    async def update_service(self, service_id: Any, update: Record) -> Optional[Record]:
        return await (await self._active()).update_service(service_id, update)

    async def delete_service(self, service_id: Any) -> Optional[Record]:
        return await (await self._active()).delete_service(service_id)

    # contacts

    async def get_all_contacts(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> ContactPage:
        backend = await self._active()
        return await backend.get_all_contacts(page=page, limit=limit, status=status, priority=priority)

    async def get_contact_by_id(self, contact_id: Any) -> Optional[Record]:
        return await (await self._active()).get_contact_by_id(contact_id)

    async def create_contact(self, data: Record) -> Record:
        return await (await self._active()).create_contact(data)

    async def update_contact(self, contact_id: Any, update: Record) -> Optional[Record]:
        return await (await self._active()).update_contact(contact_id, update)

    async def delete_contact(self, contact_id: Any) -> Optional[Record]:
        return await (await self._active()).delete_contact(contact_id)


def get_store(request: Request) -> DataStore:
    """FastAPI dependency returning the application's ``DataStore``."""
    return request.app.state.store
