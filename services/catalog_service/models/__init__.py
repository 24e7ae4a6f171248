"""Catalog Service models package."""

from services.catalog_service.models.catalog import DEFAULT_CATEGORY, Product
from services.catalog_service.models.core import Setting, UserAccount
from services.catalog_service.models.enums import UserRole
from services.catalog_service.models.media import MediaRecord

__all__ = [
    "DEFAULT_CATEGORY",
    "MediaRecord",
    "Product",
    "Setting",
    "UserAccount",
    "UserRole",
]
