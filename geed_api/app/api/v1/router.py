"""
Top‑level router for version 1 of the API.

Aggregates the domain routers.  When a new domain is introduced,
include its router here.
"""

from fastapi import APIRouter

from .endpoints import auth, contact, health, services, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(health.router, prefix="/health", tags=["health"])
