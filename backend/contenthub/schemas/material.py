"""
Content Hub - Material Schemas
Pydantic schemas for material submission, moderation and statistics
"""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from contenthub.models.material import BloomsLevel, MaterialStatus, MaterialType
from contenthub.schemas.curriculum import NodeName


class MaterialBase(BaseModel):
    """Base material schema."""
    title: Annotated[str, Field(min_length=1, max_length=300)]
    description: str = ""
    type: MaterialType = MaterialType.OTHER
    url: Annotated[str, Field(min_length=1, max_length=1000)]
    file_size: str | None = None

    # Hierarchy
    class_name: NodeName
    subject: NodeName
    chapter: NodeName
    topic: NodeName
    subtopic: NodeName
    blooms_level: BloomsLevel


class MaterialCreate(MaterialBase):
    """Schema for submitting a material."""
    pass


class MaterialResponse(MaterialBase):
    """Schema for material response."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    status: MaterialStatus
    contributor_id: uuid.UUID | None = None
    contributor_name: str
    upload_date: datetime | None = None


class MaterialStatusUpdate(BaseModel):
    """Moderator decision."""
    status: MaterialStatus


class ContributorStats(BaseModel):
    """Moderation outcome counts for one contributor name."""
    contributor_name: str
    total: int
    approved: int
    rejected: int
    approval_rate: int  # Rounded percentage


class BloomsLevelInfo(BaseModel):
    """A Bloom's level with the label shown to contributors."""
    level: BloomsLevel
    description: str
