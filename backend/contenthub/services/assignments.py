"""
Content Hub - Assignment Service
Task tracking for contributors
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contenthub.models.assignment import Assignment
from contenthub.models.user import User, UserRole
from contenthub.schemas.assignment import AssignmentCreate, AssignmentUpdate

logger = logging.getLogger(__name__)

# Fields the assigned contributor may change on their own task
CONTRIBUTOR_EDITABLE_FIELDS = {"status", "comments"}


class AssignmentNotFoundError(Exception):
    pass


class AssignmentPermissionError(Exception):
    pass


class AssignmentService:
    """Service for creating, updating and listing assignments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_subject(self, class_name: str | None = None, subject: str | None = None) -> list[Assignment]:
        query = select(Assignment)
        if class_name is not None:
            query = query.where(Assignment.class_name == class_name)
        if subject is not None:
            query = query.where(Assignment.subject == subject)
        result = await self.db.execute(query.order_by(Assignment.created_at))
        return list(result.scalars().all())

    async def list_for_contributor(self, contributor_id: uuid.UUID) -> list[Assignment]:
        result = await self.db.execute(
            select(Assignment)
            .where(Assignment.contributor_id == contributor_id)
            .order_by(Assignment.due_date)
        )
        return list(result.scalars().all())

    async def eligible_contributors(self) -> list[User]:
        """Approved contributors and moderators."""
        result = await self.db.execute(
            select(User)
            .where(
                User.is_approved.is_(True),
                User.is_active.is_(True),
                User.role.in_([UserRole.CONTRIBUTOR.value, UserRole.MODERATOR.value]),
            )
            .order_by(User.full_name)
        )
        return list(result.scalars().all())

    async def create(self, data: AssignmentCreate, assigned_by: User) -> Assignment:
        assignment = Assignment(**data.model_dump(), assigned_by=assigned_by.id)
        self.db.add(assignment)
        await self.db.flush()
        await self.db.refresh(assignment)

        logger.info("Assignment %s created by %s", assignment.id, assigned_by.email)
        return assignment

    async def update(self, assignment_id: uuid.UUID, data: AssignmentUpdate, user: User) -> Assignment:
        """
        Apply a partial update.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist
            AssignmentPermissionError: If a contributor edits someone else's
                task or a field other than status and comments
        """
        result = await self.db.execute(select(Assignment).where(Assignment.id == assignment_id))
        assignment = result.scalar_one_or_none()
        if assignment is None:
            raise AssignmentNotFoundError(f"Assignment {assignment_id} not found")

        changes = data.model_dump(exclude_unset=True)
        if not user.has_role(UserRole.MODERATOR, UserRole.ADMIN):
            if assignment.contributor_id != user.id:
                raise AssignmentPermissionError("Not your assignment")
            forbidden = set(changes) - CONTRIBUTOR_EDITABLE_FIELDS
            if forbidden:
                raise AssignmentPermissionError(
                    f"Contributors cannot change: {', '.join(sorted(forbidden))}"
                )

        for field, value in changes.items():
            setattr(assignment, field, value)

        await self.db.flush()
        await self.db.refresh(assignment)
        return assignment
