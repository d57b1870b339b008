"""
MongoDB storage backend.

``MongoStore`` wraps a pymongo ``Database`` and exposes the same
coroutine API as ``MemoryStore``.  Documents are converted to plain
records on the way out: ``_id`` becomes a string ``id`` and naive
datetimes are marked as UTC.  Identifiers that are not valid
``ObjectId`` strings simply match nothing.

pymongo calls block, so each coroutine runs its database work in the
threadpool (``run_in_threadpool``).  pymongo errors are not caught
here; they propagate to the caller.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi.concurrency import run_in_threadpool
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database

from ..core.db import CONTACTS, SERVICES, USERS, ensure_indexes
from .base import (
    CONTACT_DEFAULTS,
    SEARCH_FIELDS,
    SERVICE_DEFAULTS,
    USER_DEFAULTS,
    ContactPage,
    Page,
    Record,
    normalize_paging,
    page_count,
    with_defaults,
)


logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]
SERVICE_ORDER = [("order", ASCENDING)] + NEWEST_FIRST


def _object_id(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def _utc(value: Any) -> Any:
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(doc: Optional[Dict[str, Any]]) -> Optional[Record]:
    if doc is None:
        return None
    record = {key: _utc(value) for key, value in doc.items() if key != "_id"}
    record["id"] = str(doc["_id"])
    if isinstance(record.get("reply"), dict):
        record["reply"] = {key: _utc(value) for key, value in record["reply"].items()}
    return record


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MongoStore:
    """Document database backend built on pymongo."""

    def __init__(self, db: Database) -> None:
        self.db = db
        ensure_indexes(db)

    # ------------------------------------------------------------------
    # blocking helpers, always called through run_in_threadpool
    # ------------------------------------------------------------------

    def _get(self, collection: str, record_id: Any) -> Optional[Record]:
        oid = _object_id(record_id)
        if oid is None:
            return None
        return _to_record(self.db[collection].find_one({"_id": oid}))

    def _find_one(self, collection: str, query: Dict[str, Any]) -> Optional[Record]:
        return _to_record(self.db[collection].find_one(query))

    def _count(self, collection: str, query: Dict[str, Any]) -> int:
        return self.db[collection].count_documents(query)

    def _insert(self, collection: str, doc: Record) -> Record:
        now = _now()
        doc = dict(doc)
        doc.pop("id", None)
        doc["created_at"] = now
        doc["updated_at"] = now
        result = self.db[collection].insert_one(doc)
        doc["_id"] = result.inserted_id
        return _to_record(doc)

    def _update(self, collection: str, record_id: Any, update: Record) -> Optional[Record]:
        oid = _object_id(record_id)
        if oid is None:
            return None
        changes = {key: value for key, value in update.items() if key not in ("id", "_id")}
        changes["updated_at"] = _now()
        doc = self.db[collection].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return _to_record(doc)

    def _delete(self, collection: str, record_id: Any) -> Optional[Record]:
        oid = _object_id(record_id)
        if oid is None:
            return None
        return _to_record(self.db[collection].find_one_and_delete({"_id": oid}))

    def _page(self, collection: str, query: Dict[str, Any], sort, page, limit, projection=None) -> Page:
        page, limit, skip = normalize_paging(page, limit)
        cursor = self.db[collection].find(query, projection).sort(sort).skip(skip).limit(limit)
        items = [_to_record(doc) for doc in cursor]
        total = self.db[collection].count_documents(query)
        return Page(items=items, total=total, page=page, pages=page_count(total, limit))

    def _contact_page(self, query: Dict[str, Any], page, limit) -> ContactPage:
        result = self._page(CONTACTS, query, NEWEST_FIRST, page, limit)
        grouped = self.db[CONTACTS].aggregate([{"$group": {"_id": "$status", "count": {"$sum": 1}}}])
        status_counts = {(row["_id"] or "new"): row["count"] for row in grouped}
        return ContactPage(
            items=result.items,
            total=result.total,
            page=result.page,
            pages=result.pages,
            status_counts=status_counts,
        )

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------

    async def find_user_by_email(self, email: str) -> Optional[Record]:
        return await run_in_threadpool(self._find_one, USERS, {"email": email.lower()})

    async def find_user_by_id(self, user_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._get, USERS, user_id)

    async def create_user(self, data: Record) -> Record:
        from ..core.security import hash_password

        user = with_defaults(USER_DEFAULTS, data)
        user["email"] = data["email"].lower()
        user["password"] = hash_password(data["password"])
        return await run_in_threadpool(self._insert, USERS, user)

    async def update_user(self, user_id: Any, update: Record) -> Optional[Record]:
        from ..core.security import hash_password

        update = dict(update)
        if update.get("password"):
            update["password"] = hash_password(update["password"])
        if update.get("email"):
            update["email"] = update["email"].lower()
        return await run_in_threadpool(self._update, USERS, user_id, update)

    async def delete_user(self, user_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._delete, USERS, user_id)

    async def get_all_users(self, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        return await run_in_threadpool(self._page, USERS, {}, NEWEST_FIRST, page, limit, {"password": 0})

    async def count_users(self) -> int:
        return await run_in_threadpool(self._count, USERS, {})

    # ------------------------------------------------------------------
    # services
    # ------------------------------------------------------------------

    async def get_all_services(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page:
        query: Dict[str, Any] = {"is_active": True}
        if category:
            query["category"] = category
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{name: pattern} for name in SEARCH_FIELDS]
        return await run_in_threadpool(self._page, SERVICES, query, SERVICE_ORDER, page, limit)

    async def count_services(self, active_only: bool = True) -> int:
        return await run_in_threadpool(self._count, SERVICES, {"is_active": True} if active_only else {})

    async def get_service_by_id(self, service_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._get, SERVICES, service_id)

    async def create_service(self, data: Record) -> Record:
        return await run_in_threadpool(self._insert, SERVICES, with_defaults(SERVICE_DEFAULTS, data))

    async def update_service(self, service_id: Any, update: Record) -> Optional[Record]:
        return await run_in_threadpool(self._update, SERVICES, service_id, update)

    async def delete_service(self, service_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._delete, SERVICES, service_id)

    # ------------------------------------------------------------------
    # contacts
    # ------------------------------------------------------------------

    async def get_all_contacts(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> ContactPage:
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if priority:
            query["priority"] = priority
        return await run_in_threadpool(self._contact_page, query, page, limit)

    async def get_contact_by_id(self, contact_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._get, CONTACTS, contact_id)

    async def create_contact(self, data: Record) -> Record:
        return await run_in_threadpool(self._insert, CONTACTS, with_defaults(CONTACT_DEFAULTS, data))

    async def update_contact(self, contact_id: Any, update: Record) -> Optional[Record]:
        return await run_in_threadpool(self._update, CONTACTS, contact_id, update)

    async def delete_contact(self, contact_id: Any) -> Optional[Record]:
        return await run_in_threadpool(self._delete, CONTACTS, contact_id)
