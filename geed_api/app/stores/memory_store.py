"""
In‑memory storage backend.

``MemoryStore`` keeps users, services and contacts in three Python
lists and hands out identifiers from a single counter shared by all
collections.  It mirrors the query semantics of ``MongoStore``
(filters, search, sorting, pagination and status counts) using plain
iteration.  Contents live as long as the instance does.

The store assumes a single process without concurrent writers; no
locking is performed.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

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
    strip_password,
    with_defaults,
)


logger = logging.getLogger(__name__)


SAMPLE_USERS: List[Record] = [
    {"name": "Admin User", "email": "admin@geed.com", "password": "admin123", "role": "admin"},
    {"name": "John Doe", "email": "john@example.com", "password": "password123", "role": "user"},
]

SAMPLE_SERVICES: List[Record] = [
    {
        "title": "Web Development",
        "description": "Custom web application development using modern technologies",
        "short_description": "Modern, responsive web applications",
        "price": 2500,
        "category": "technology",
        "duration": "4-6 weeks",
        "features": ["Responsive Design", "Modern Framework", "Database Integration", "API Development"],
    },
    {
        "title": "Mobile App Development",
        "description": "Native and cross-platform mobile application development",
        "short_description": "iOS and Android apps from a single team",
        "price": 3500,
        "category": "technology",
        "duration": "6-8 weeks",
        "features": ["iOS & Android", "Cross-platform", "API Integration", "App Store Deployment"],
    },
    {
        "title": "Digital Marketing",
        "description": "Comprehensive digital marketing strategy and implementation",
        "short_description": "Strategy, SEO and social media campaigns",
        "price": 1500,
        "category": "marketing",
        "duration": "3-4 weeks",
        "features": ["SEO Optimization", "Social Media", "Content Strategy", "Analytics"],
    },
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Process‑local substitute for the MongoDB backend."""

    def __init__(self) -> None:
        self.users: List[Record] = []
        self.services: List[Record] = []
        self.contacts: List[Record] = []
        self.next_id = 1

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _new_record(self, data: Record) -> Record:
        now = _now()
        record = copy.deepcopy(data)
        record["id"] = str(self.next_id)
        record["created_at"] = now
        record["updated_at"] = now
        self.next_id += 1
        return record

    @staticmethod
    def _find(collection: List[Record], record_id: Any) -> Optional[Record]:
        record_id = str(record_id)
        for record in collection:
            if record["id"] == record_id:
                return record
        return None

    @staticmethod
    def _newest_first(records: List[Record]) -> List[Record]:
        return sorted(records, key=lambda r: (r["created_at"], int(r["id"])), reverse=True)

    def _update(self, collection: List[Record], record_id: Any, update: Record) -> Optional[Record]:
        record = self._find(collection, record_id)
        if record is None:
            return None
        record.update(copy.deepcopy(update))
        record["updated_at"] = _now()
        return copy.deepcopy(record)

    def _delete(self, collection: List[Record], record_id: Any) -> Optional[Record]:
        record = self._find(collection, record_id)
        if record is None:
            return None
        collection.remove(record)
        return record

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------

    async def find_user_by_email(self, email: str) -> Optional[Record]:
        email = email.lower()
        for user in self.users:
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    async def find_user_by_id(self, user_id: Any) -> Optional[Record]:
        user = self._find(self.users, user_id)
        return copy.deepcopy(user) if user else None

    async def create_user(self, data: Record) -> Record:
        from ..core.security import hash_password

        email = data["email"].lower()
        if await self.find_user_by_email(email):
            raise DuplicateKeyError(f"E11000 duplicate key error: email {email!r} already exists")
        user = with_defaults(USER_DEFAULTS, data)
        user["email"] = email
        user["password"] = hash_password(data["password"])
        record = self._new_record(user)
        self.users.append(record)
        return copy.deepcopy(record)

    async def update_user(self, user_id: Any, update: Record) -> Optional[Record]:
        from ..core.security import hash_password

        update = dict(update)
        if update.get("password"):
            update["password"] = hash_password(update["password"])
        if update.get("email"):
            update["email"] = update["email"].lower()
            owner = await self.find_user_by_email(update["email"])
            if owner and owner["id"] != str(user_id):
                raise DuplicateKeyError(f"E11000 duplicate key error: email {update['email']!r} already exists")
        return self._update(self.users, user_id, update)

    async def delete_user(self, user_id: Any) -> Optional[Record]:
        return self._delete(self.users, user_id)

    async def get_all_users(self, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        page, limit, skip = normalize_paging(page, limit)
        users = self._newest_first(self.users)
        items = [strip_password(copy.deepcopy(u)) for u in users[skip:skip + limit]]
        return Page(items=items, total=len(users), page=page, pages=page_count(len(users), limit))

    async def count_users(self) -> int:
        return len(self.users)

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
        page, limit, skip = normalize_paging(page, limit)
        services = [s for s in self.services if s.get("is_active", True)]
        if category:
            services = [s for s in services if s.get("category") == category]
        if search:
            term = search.lower()
            services = [
                s for s in services
                if any(term in (s.get(name) or "").lower() for name in SEARCH_FIELDS)
            ]
        # Newest first, then a stable sort by display order.
        services = self._newest_first(services)
        services.sort(key=lambda s: s.get("order") or 0)
        items = [copy.deepcopy(s) for s in services[skip:skip + limit]]
        return Page(items=items, total=len(services), page=page, pages=page_count(len(services), limit))

    async def count_services(self, active_only: bool = True) -> int:
        if not active_only:
            return len(self.services)
        return sum(1 for s in self.services if s.get("is_active", True))

    async def get_service_by_id(self, service_id: Any) -> Optional[Record]:
        service = self._find(self.services, service_id)
        return copy.deepcopy(service) if service else None

    async def create_service(self, data: Record) -> Record:
        record = self._new_record(with_defaults(SERVICE_DEFAULTS, data))
        self.services.append(record)
        return copy.deepcopy(record)

    async def update_service(self, service_id: Any, update: Record) -> Optional[Record]:
        return self._update(self.services, service_id, update)

    async def delete_service(self, service_id: Any) -> Optional[Record]:
        return self._delete(self.services, service_id)

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
        page, limit, skip = normalize_paging(page, limit)
        contacts = list(self.contacts)
        if status:
            contacts = [c for c in contacts if c.get("status") == status]
        if priority:
            contacts = [c for c in contacts if c.get("priority") == priority]
        contacts = self._newest_first(contacts)
        status_counts: Dict[str, int] = {}
        for contact in self.contacts:
            key = contact.get("status") or "new"
            status_counts[key] = status_counts.get(key, 0) + 1
        items = [copy.deepcopy(c) for c in contacts[skip:skip + limit]]
        return ContactPage(
            items=items,
            total=len(contacts),
            page=page,
            pages=page_count(len(contacts), limit),
            status_counts=status_counts,
        )

    async def get_contact_by_id(self, contact_id: Any) -> Optional[Record]:
        contact = self._find(self.contacts, contact_id)
        return copy.deepcopy(contact) if contact else None

    async def create_contact(self, data: Record) -> Record:
        record = self._new_record(with_defaults(CONTACT_DEFAULTS, data))
        self.contacts.append(record)
        return copy.deepcopy(record)

    async def update_contact(self, contact_id: Any, update: Record) -> Optional[Record]:
        return self._update(self.contacts, contact_id, update)

    async def delete_contact(self, contact_id: Any) -> Optional[Record]:
        return self._delete(self.contacts, contact_id)

    # ------------------------------------------------------------------
    # sample data
    # ------------------------------------------------------------------

    async def initialize_sample_data(self) -> None:
        """Seed two users and three active services owned by the admin."""
        admin = None
        for user in SAMPLE_USERS:
            created = await self.create_user(user)
            if created["role"] == "admin" and admin is None:
                admin = created
        for order, service in enumerate(SAMPLE_SERVICES, start=1):
            await self.create_service({**service, "order": order, "created_by": admin["id"]})
        logger.info(
            "Sample data initialized in memory store: %d users, %d services",
            len(self.users),
            len(self.services),
        )
