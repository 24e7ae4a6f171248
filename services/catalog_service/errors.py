"""Exceptions raised by the catalog store."""


class CatalogStoreError(Exception):
    """Base class for catalog store failures."""


class StoreUnavailableError(CatalogStoreError):
    """The underlying database could not be opened or is not ready."""


class NotFoundError(CatalogStoreError):
    """The requested record or blob URL does not exist."""
