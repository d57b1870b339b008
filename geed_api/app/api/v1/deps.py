"""FastAPI dependencies that build per-request service objects."""

from fastapi import Depends

from ...services.catalog_service import CatalogService
from ...services.contact_service import ContactService
from ...services.user_service import UserService
from ...stores import DataStore, get_store


def get_user_service(store: DataStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_catalog_service(store: DataStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_contact_service(store: DataStore = Depends(get_store)) -> ContactService:
    return ContactService(store)
