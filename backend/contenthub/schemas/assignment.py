"""
Content Hub - Assignment Schemas
Pydantic schemas for contributor task tracking
"""
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from contenthub.models.assignment import AssignmentStatus
from contenthub.schemas.curriculum import NodeName


class AssignmentCreate(BaseModel):
    """Schema for creating an assignment."""
    contributor_id: uuid.UUID | None = None
    class_name: NodeName
    subject: NodeName
    chapter: NodeName
    topic: NodeName
    status: AssignmentStatus = AssignmentStatus.PENDING
    due_date: datetime | None = None
    comments: str | None = None


class AssignmentUpdate(BaseModel):
    """Partial update; contributors may only send status and comments."""
    contributor_id: uuid.UUID | None = None
    class_name: NodeName | None = None
    subject: NodeName | None = None
    chapter: NodeName | None = None
    topic: NodeName | None = None
    status: AssignmentStatus | None = None
    due_date: datetime | None = None
    comments: str | None = None


class AssignmentResponse(BaseModel):
    """Schema for assignment response."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    contributor_id: uuid.UUID | None
    assigned_by: uuid.UUID
    class_name: str
    subject: str
    chapter: str
    topic: str
    status: AssignmentStatus
    due_date: datetime | None
    comments: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
