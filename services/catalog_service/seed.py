"""Default records written once when the catalog is first created."""

from datetime import datetime

from libs.common.config import Settings
from services.catalog_service.models import UserAccount, UserRole
from services.catalog_service.schemas import BusinessInfo, Coordinates
from sqlalchemy import Connection, insert


def seed_owner_account(conn: Connection, settings: Settings, *, now: datetime) -> None:
    """Insert the single owner credential row."""
    conn.execute(
        insert(UserAccount).values(
            username=settings.OWNER_USERNAME,
            password=settings.OWNER_PASSWORD,
            role=UserRole.OWNER,
            created_at=now,
        )
    )


def default_business_info(settings: Settings) -> BusinessInfo:
    # Coordinates are approximate; the owner is expected to adjust them.
    return BusinessInfo(
        name=settings.BUSINESS_NAME,
        owner=settings.BUSINESS_OWNER,
        address=settings.BUSINESS_ADDRESS,
        coords=Coordinates(lat=settings.BUSINESS_LAT, lng=settings.BUSINESS_LNG),
    )
