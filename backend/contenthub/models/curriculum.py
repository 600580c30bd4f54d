"""
Content Hub - Curriculum Models
Stored curriculum hierarchy document
"""
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from contenthub.core.database import Base


class CurriculumDocument(Base):
    """
    The whole Class -> Subtopic tree as one JSON document.

    Plain JSON (not JSONB) so PostgreSQL keeps the key order, which is the
    display order of every level.
    """

    __tablename__ = "curriculum_documents"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    key: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    tree: Mapped[dict] = mapped_column(JSON)
    revision: Mapped[int] = mapped_column(Integer, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    # Bumped by SQLAlchemy on every UPDATE; a stale row raises StaleDataError
    __mapper_args__ = {"version_id_col": revision}
