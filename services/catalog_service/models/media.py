"""Media models: uploaded images and logos stored as blobs."""

from datetime import datetime

from libs.db.base import Base
from libs.db.types import UTCDateTime
from sqlalchemy import Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column


class MediaRecord(Base):
    """Binary payload with its upload metadata. Never modified after insert."""

    __tablename__ = "media"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    blob: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self):
        return f"<MediaRecord {self.id} {self.mime_type}>"
