"""
Content Hub - Material Models
Uploaded learning materials and their moderation status
"""
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from contenthub.core.database import Base


class MaterialType(str, Enum):
    """File kind of an uploaded material."""
    VIDEO = "mp4"
    PDF = "pdf"
    DOC = "docx"
    IMAGE = "image"
    OTHER = "other"


class MaterialStatus(str, Enum):
    """Moderation state."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BloomsLevel(str, Enum):
    """Cognitive-complexity tag."""
    LEVEL_0 = "Level 0 (Readiness)"
    LEVEL_1 = "Level 1 (Remember & Understand)"
    LEVEL_2 = "Level 2 (Apply & Analyze)"


class Material(Base):
    """A learning material classified against a curriculum path."""

    __tablename__ = "materials"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[MaterialType] = mapped_column(String(20), default=MaterialType.OTHER)
    url: Mapped[str] = mapped_column(String(1000))  # Object storage location
    file_size: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Hierarchy
    class_name: Mapped[str] = mapped_column(String(200), index=True)
    subject: Mapped[str] = mapped_column(String(200), index=True)
    chapter: Mapped[str] = mapped_column(String(200))
    topic: Mapped[str] = mapped_column(String(200))
    subtopic: Mapped[str] = mapped_column(String(200))
    blooms_level: Mapped[BloomsLevel] = mapped_column(String(50))

    # Moderation
    status: Mapped[MaterialStatus] = mapped_column(
        String(20),
        default=MaterialStatus.PENDING,
        index=True
    )
    contributor_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    contributor_name: Mapped[str] = mapped_column(String(200), default="Anonymous")

    # Timestamps
    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
