"""Settings and user account models."""

from datetime import datetime
from typing import Any

from libs.db.base import Base
from libs.db.types import UTCDateTime
from services.catalog_service.models.enums import UserRole, enum_values
from sqlalchemy import JSON
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column


class Setting(Base):
    """Key/value settings (e.g. 'business', 'logoMediaId'). Last write wins."""

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    def __repr__(self):
        return f"<Setting {self.key}>"


class UserAccount(Base):
    """Owner credential. One row is seeded when the table is created."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), primary_key=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            values_callable=enum_values,
            name="user_role_enum",
            native_enum=False,
        ),
        nullable=False,
        default=UserRole.OWNER,
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self):
        return f"<UserAccount {self.username}>"
