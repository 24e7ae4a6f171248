"""Process-local ``blob:`` URLs handed out for stored media.

URLs live only as long as this registry (or until revoked). Callers that
display a blob are expected to revoke its URL once they stop showing it.
"""

import uuid
from typing import NamedTuple

from libs.common.logging import get_logger
from services.catalog_service.errors import NotFoundError

logger = get_logger(__name__)

BLOB_URL_PREFIX = "blob:catalog/"


class BlobEntry(NamedTuple):
    data: bytes
    mime_type: str


class BlobUrlRegistry:
    def __init__(self) -> None:
        self._entries: dict[str, BlobEntry] = {}

    def create(self, data: bytes, mime_type: str) -> str:
        """Register ``data`` and return a fresh URL for it."""
        url = f"{BLOB_URL_PREFIX}{uuid.uuid4().hex}"
        self._entries[url] = BlobEntry(data=data, mime_type=mime_type)
        return url

    def resolve(self, url: str) -> BlobEntry:
        try:
            return self._entries[url]
        except KeyError:
            raise NotFoundError(f"Blob URL {url} is not live") from None

    def revoke(self, url: str) -> None:
        self._entries.pop(url, None)

    def revoke_all(self) -> None:
        if self._entries:
            logger.debug("Revoking %d outstanding blob URLs", len(self._entries))
        self._entries.clear()

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
