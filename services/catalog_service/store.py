"""Local catalog store: products, media blobs, settings and the owner session.

Each store instance owns its own engine and session factory; nothing is kept
in module globals. Every public data operation runs in one transaction.

Usage:
    async with LocalCatalogStore() as store:
        product = await store.add_product({"name": "Ledger book", "price": 120})
        products = await store.list_products(category="Stationery")
"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Callable, Optional, Union

from libs.common.config import Settings, get_settings
from libs.common.datetime_utils import utc_now
from libs.common.logging import get_logger
from libs.db.base import Base
from libs.db.config import (
    create_catalog_engine,
    create_session_factory,
    create_sync_engine,
)
from libs.db.session import transaction
from services.catalog_service.blob_urls import BlobUrlRegistry
from services.catalog_service.errors import NotFoundError, StoreUnavailableError
from services.catalog_service.models import (
    MediaRecord,
    Product,
    Setting,
    UserAccount,
    UserRole,
)
from services.catalog_service.schemas import (
    BusinessInfo,
    MediaUpload,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from services.catalog_service.seed import default_business_info, seed_owner_account
from services.catalog_service.session_flags import SessionFlagStore
from sqlalchemy import Connection, delete, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = get_logger(__name__)

SCHEMA_VERSION = 1

BUSINESS_SETTING_KEY = "business"
LOGO_SETTING_KEY = "logoMediaId"
OWNER_SESSION_KEY = "owner_logged_in"


def new_id() -> str:
    return str(uuid.uuid4())


class LocalCatalogStore:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
        session_flags: Optional[SessionFlagStore] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._clock = clock
        self._new_id = id_factory
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._blob_urls = BlobUrlRegistry()
        self._session_flags = session_flags or SessionFlagStore(
            create_sync_engine(self.settings.SESSION_STORE_URL)
        )

    async def __aenter__(self) -> "LocalCatalogStore":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> bool:
        """Open the database, create the schema on first use and seed defaults.

        Safe to call more than once; later calls only re-check the business
        info seed.

        Raises:
            StoreUnavailableError: the database cannot be opened or was written
                by a newer schema version.
        """
        if self._engine is None:
            await self._open()

        if await self.get_business_info() is None:
            await self.set_business_info(default_business_info(self.settings))
            logger.info("Seeded default business info")
        return True

    async def close(self) -> None:
        """Release blob URLs and dispose both engines."""
        self._blob_urls.revoke_all()
        self._session_flags.close()
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    async def _open(self) -> None:
        url = self.settings.CATALOG_DATABASE_URL
        engine = create_catalog_engine(url, echo=self.settings.DB_ECHO)
        try:
            async with engine.begin() as conn:
                result = await conn.exec_driver_sql("PRAGMA user_version")
                version = result.scalar_one()
                if version > SCHEMA_VERSION:
                    raise StoreUnavailableError(
                        f"Catalog schema version {version} is newer than "
                        f"supported {SCHEMA_VERSION}"
                    )
                if version < SCHEMA_VERSION:
                    await conn.run_sync(self._upgrade_schema)
                    await conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
                    logger.info(
                        "Catalog schema upgraded from v%d to v%d", version, SCHEMA_VERSION
                    )
        except (SQLAlchemyError, OSError) as exc:
            await engine.dispose()
            raise StoreUnavailableError(f"Could not open catalog store at {url}") from exc
        except BaseException:
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = create_session_factory(engine)

    def _upgrade_schema(self, conn: Connection) -> None:
        # Runs inside the opening transaction: tables, owner row and the
        # version stamp commit together or not at all.
        existing = set(inspect(conn).get_table_names())
        Base.metadata.create_all(conn)
        if UserAccount.__tablename__ not in existing:
            seed_owner_account(conn, self.settings, now=self._clock())
            logger.info("Seeded owner account %s", self.settings.OWNER_USERNAME)

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise StoreUnavailableError("Catalog store is not initialised; call init() first")
        return self._session_factory

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    async def save_media(self, file: Union[MediaUpload, dict[str, Any]]) -> str:
        """Store an uploaded file and return its new media id. No dedup."""
        upload = MediaUpload.model_validate(file)
        record = MediaRecord(
            id=self._new_id(),
            name=upload.name,
            mime_type=upload.mime_type,
            size_bytes=upload.size_bytes,
            blob=upload.data,
            created_at=self._clock(),
        )
        async with transaction(self._sessions()) as session:
            session.add(record)

        logger.debug(
            "Saved media %s (%s, %d bytes)",
            record.id,
            record.mime_type,
            record.size_bytes,
            extra={"media_id": record.id},
        )
        return record.id

    async def get_media_url(self, media_id: str) -> Optional[str]:
        """Return a fresh blob URL for ``media_id``, or None if it is unknown.

        The caller owns the URL and should pass it to :meth:`revoke_media_url`
        once it is no longer displayed.
        """
        async with transaction(self._sessions()) as session:
            record = await session.get(MediaRecord, media_id)
            if record is None:
                return None
            return self._blob_urls.create(record.blob, record.mime_type)

    def read_media_url(self, url: str) -> bytes:
        return self._blob_urls.resolve(url).data

    def revoke_media_url(self, url: str) -> None:
        self._blob_urls.revoke(url)

    async def set_logo(self, file: Union[MediaUpload, dict[str, Any]]) -> str:
        """Save ``file`` and point the logo setting at it.

        The previous logo's media record is left in place.
        """
        media_id = await self.save_media(file)
        async with transaction(self._sessions()) as session:
            await self._put_setting(session, LOGO_SETTING_KEY, media_id)

        logger.info("Logo set to media %s", media_id)
        return media_id

    async def get_logo_url(self) -> Optional[str]:
        async with transaction(self._sessions()) as session:
            media_id = await self._get_setting(session, LOGO_SETTING_KEY)
        if not media_id:
            return None
        return await self.get_media_url(media_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def add_product(
        self, data: Union[ProductCreate, dict[str, Any]]
    ) -> ProductResponse:
        """Create a product, filling defaults for omitted fields.

        Supplying the id of an existing product replaces that record.
        """
        payload = ProductCreate.model_validate(data)
        now = self._clock()
        product = Product(
            id=payload.id or self._new_id(),
            name=payload.name,
            category=payload.category,
            price=payload.price,
            stock=payload.stock,
            image_media_id=payload.image_media_id,
            description=payload.description,
            created_at=now,
            updated_at=now,
        )
        async with transaction(self._sessions()) as session:
            product = await session.merge(product)
            response = ProductResponse.model_validate(product)

        logger.debug("Added product %s (%s)", response.id, response.name)
        return response

    async def update_product(
        self, product_id: str, patch: Union[ProductUpdate, dict[str, Any]]
    ) -> ProductResponse:
        """Apply ``patch`` to an existing product and refresh ``updated_at``.

        Raises:
            NotFoundError: no product has ``product_id``; nothing is written.
        """
        async with transaction(self._sessions()) as session:
            product = await session.get(Product, product_id)
            if product is None:
                raise NotFoundError(f"Product {product_id} not found")

            changes = ProductUpdate.model_validate(patch).changes()

            for field, value in changes.items():
                setattr(product, field, value)
            product.updated_at = self._clock()
            await session.flush()
            response = ProductResponse.model_validate(product)

        logger.debug(
            "Updated product %s fields=%s",
            product_id,
            sorted(changes),
            extra={"product_id": product_id},
        )
        return response

    async def delete_product(self, product_id: str) -> None:
        """Remove a product. Deleting a missing id is a no-op."""
        async with transaction(self._sessions()) as session:
            await session.execute(delete(Product).where(Product.id == product_id))

    async def list_products(
        self, category: Optional[str] = None
    ) -> list[ProductResponse]:
        """Return all products, newest first, optionally for one category."""
        query = select(Product).order_by(Product.created_at.desc())
        if category:
            query = query.where(Product.category == category)

        async with transaction(self._sessions()) as session:
            result = await session.execute(query)
            return [ProductResponse.model_validate(p) for p in result.scalars().all()]

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def set_business_info(self, info: Union[BusinessInfo, dict[str, Any]]) -> None:
        """Overwrite the stored business info wholesale."""
        value = BusinessInfo.model_validate(info).model_dump(mode="json")
        async with transaction(self._sessions()) as session:
            await self._put_setting(session, BUSINESS_SETTING_KEY, value)

    async def get_business_info(self) -> Optional[BusinessInfo]:
        async with transaction(self._sessions()) as session:
            value = await self._get_setting(session, BUSINESS_SETTING_KEY)
        if not value:
            return None
        return BusinessInfo.model_validate(value)

    async def _get_setting(self, session: AsyncSession, key: str) -> Any:
        row = await session.get(Setting, key)
        return row.value if row is not None else None

    async def _put_setting(self, session: AsyncSession, key: str, value: Any) -> None:
        await session.merge(Setting(key=key, value=value))

    # ------------------------------------------------------------------
    # Owner session
    # ------------------------------------------------------------------

    async def login_owner(self, username: str, password: str) -> bool:
        """Check the owner credential and mark the session as logged in.

        A mismatch returns False and leaves the session flag untouched.
        """
        async with transaction(self._sessions()) as session:
            user = await session.get(UserAccount, username)

        ok = (
            user is not None
            and user.password == password
            and user.role == UserRole.OWNER
        )
        if ok:
            await asyncio.to_thread(self._session_flags.set, OWNER_SESSION_KEY, "1")
            logger.info("Owner %s logged in", username, extra={"username": username})
        else:
            logger.warning(
                "Rejected owner login for %s", username, extra={"username": username}
            )
        return ok

    def logout_owner(self) -> None:
        self._session_flags.remove(OWNER_SESSION_KEY)

    def is_owner(self) -> bool:
        return self._session_flags.get(OWNER_SESSION_KEY) == "1"
