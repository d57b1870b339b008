"""
Types and helpers shared by the storage backends.

Both backends return plain ``dict`` records with a string ``id`` and
page objects of identical shape, so callers never need to know which
backend produced a result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Record = Dict[str, Any]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

SEARCH_FIELDS = ("title", "description", "short_description")

# Field defaults applied by both backends on insert.
USER_DEFAULTS: Record = {"role": "user", "is_active": True, "phone": None, "company": None}
SERVICE_DEFAULTS: Record = {
    "icon": "service",
    "image": None,
    "price": None,
    "currency": "USD",
    "duration": None,
    "features": [],
    "is_active": True,
    "order": 0,
}
CONTACT_DEFAULTS: Record = {
    "phone": None,
    "status": "new",
    "priority": "medium",
    "assigned_to": None,
    "reply": None,
    "ip_address": None,
    "user_agent": None,
}


def with_defaults(defaults: Record, data: Record) -> Record:
    merged = {key: (list(value) if isinstance(value, list) else value) for key, value in defaults.items()}
    merged.update({key: value for key, value in data.items() if value is not None or key not in defaults})
    return merged


@dataclass
class Page:
    """One page of a filtered, sorted result set."""

    items: List[Record]
    total: int
    page: int
    pages: int


@dataclass
class ContactPage(Page):
    """Contacts page; ``status_counts`` covers every stored contact."""

    status_counts: Dict[str, int] = field(default_factory=dict)


def normalize_paging(page: Optional[int], limit: Optional[int]) -> Tuple[int, int, int]:
    """Return ``(page, limit, skip)`` with defaults applied to missing or invalid values."""
    page = page if page and page > 0 else DEFAULT_PAGE
    limit = limit if limit and limit > 0 else DEFAULT_LIMIT
    return page, limit, (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def strip_password(record: Optional[Record]) -> Optional[Record]:
    if record is None:
        return None
    return {key: value for key, value in record.items() if key != "password"}
