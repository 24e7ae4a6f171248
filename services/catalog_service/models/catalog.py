"""Catalog models: products."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.db.base import Base
from libs.db.types import UTCDateTime
from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

DEFAULT_CATEGORY = "Stationery"


class Product(Base):
    """Physical items sold by the store (stationery, furniture, ...)."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_CATEGORY, index=True
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Weak reference to media.id; not a foreign key
    image_media_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self):
        return f"<Product {self.name}>"
