"""Pydantic schemas for catalog service."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from services.catalog_service.models import DEFAULT_CATEGORY

# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductCreate(BaseModel):
    """Input for a new product. Omitted fields fall back to catalog defaults."""

    id: Optional[str] = Field(None, max_length=64)
    name: str = Field(..., max_length=255)
    category: str = Field(DEFAULT_CATEGORY, max_length=100)
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(0, ge=0)
    image_media_id: Optional[str] = None
    description: str = ""

    @field_validator("id", "image_media_id", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, v: Any) -> Any:
        return v or DEFAULT_CATEGORY

    @field_validator("price", "stock", mode="before")
    @classmethod
    def _missing_number_is_zero(cls, v: Any) -> Any:
        if v is None or v == "":
            return 0
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _missing_description(cls, v: Any) -> Any:
        return v or ""


class ProductUpdate(BaseModel):
    """Partial product update.

    Only the fields below can be patched; ``id`` and ``created_at`` are
    rejected as unknown keys.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    image_media_id: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self) -> "ProductUpdate":
        for field in ("name", "category", "price", "stock", "description"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller explicitly set."""
        return self.model_dump(exclude_unset=True)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    price: Decimal
    stock: int
    image_media_id: Optional[str] = None
    description: str
    created_at: datetime
    updated_at: datetime


# ============================================================================
# MEDIA SCHEMAS
# ============================================================================


class MediaUpload(BaseModel):
    """A file handed over by the caller (e.g. from a file picker)."""

    name: str = Field(..., max_length=255)
    mime_type: str = Field("application/octet-stream", max_length=255)
    data: bytes
    size_bytes: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _default_size(self) -> "MediaUpload":
        if self.size_bytes is None:
            self.size_bytes = len(self.data)
        return self


# ============================================================================
# SETTINGS SCHEMAS
# ============================================================================


class Coordinates(BaseModel):
    lat: float
    lng: float


class BusinessInfo(BaseModel):
    name: str
    owner: str
    address: str
    coords: Coordinates
