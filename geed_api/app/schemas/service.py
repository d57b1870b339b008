"""
Pydantic schemas for catalog services.

A service is an offering shown on the public site.  Only active
services are listed publicly; ``order`` controls display order
(lower first).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import UserSummary

ServiceCategory = Literal["consulting", "technology", "support", "training", "marketing", "other"]
Currency = Literal["USD", "EUR", "MAD"]

CATEGORIES = [
    {"value": "consulting", "label": "Consulting Services"},
    {"value": "technology", "label": "Technology Solutions"},
    {"value": "support", "label": "Customer Support"},
    {"value": "training", "label": "Training & Development"},
    {"value": "marketing", "label": "Marketing & Branding"},
    {"value": "other", "label": "Other Services"},
]


def _clean_features(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value if item and item.strip()]


class ServiceCreate(BaseModel):
    """Schema for creating a service (admin only)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    short_description: str = Field(..., min_length=10, max_length=200)
    category: ServiceCategory
    price: Optional[float] = Field(None, ge=0)
    currency: Currency = "USD"
    duration: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    icon: str = "service"
    image: Optional[str] = None
    is_active: bool = True
    order: int = 0

    @field_validator("features")
    @classmethod
    def clean_features(cls, value):
        return _clean_features(value)


class ServiceUpdate(BaseModel):
    """Partial update; only provided fields change."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    short_description: Optional[str] = Field(None, min_length=10, max_length=200)
    category: Optional[ServiceCategory] = None
    price: Optional[float] = Field(None, ge=0)
    currency: Optional[Currency] = None
    duration: Optional[str] = None
    features: Optional[List[str]] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None
    order: Optional[int] = None

    @field_validator("features")
    @classmethod
    def clean_features(cls, value):
        return _clean_features(value)


class ServiceRead(BaseModel):
    id: str
    title: str
    description: str
    short_description: Optional[str] = None
    category: str
    price: Optional[float] = None
    currency: str = "USD"
    duration: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    icon: str = "service"
    image: Optional[str] = None
    is_active: bool = True
    order: int = 0
    created_by: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    service: ServiceRead


class ServiceListResponse(BaseModel):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    services: List[ServiceRead]


class Category(BaseModel):
    value: str
    label: str


class CategoryListResponse(BaseModel):
    success: bool = True
    categories: List[Category]
