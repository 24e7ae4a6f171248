"""
Input factories for creating valid catalog test data.

Every factory produces a valid payload accepted by the store.
Override any field via kwargs.

Usage:
    product = await store.add_product(ProductInputFactory.create(price=99))
    media_id = await store.save_media(MediaUploadFactory.create())
"""

import uuid
from datetime import datetime, timedelta, timezone

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TickingClock:
    """Deterministic clock that advances by ``step`` on every call."""

    def __init__(
        self,
        start: datetime = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


def _unique_name(prefix: str) -> str:
    return f"{prefix} {uuid.uuid4().hex[:6]}"


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductInputFactory:
    @staticmethod
    def create(**overrides):
        defaults = {
            "name": _unique_name("Notebook"),
            "category": "Stationery",
            "price": 45.5,
            "stock": 12,
            "description": "A5 ruled notebook",
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------


class MediaUploadFactory:
    @staticmethod
    def create(**overrides):
        from services.catalog_service.schemas import MediaUpload

        defaults = {
            "name": "logo.png",
            "mime_type": "image/png",
            "data": b"\x89PNG\r\n\x1a\n" + uuid.uuid4().bytes,
        }
        defaults.update(overrides)
        return MediaUpload(**defaults)
