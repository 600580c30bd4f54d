"""
Content Hub - Material Service
Submission, moderation and approval statistics for learning materials
"""
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contenthub.models.material import Material, MaterialStatus
from contenthub.models.user import User, UserRole
from contenthub.schemas.material import ContributorStats, MaterialCreate
from contenthub.schemas.user import UserStats
from contenthub.services.curriculum import CurriculumService

logger = logging.getLogger(__name__)


class MaterialNotFoundError(Exception):
    """No material with the given id."""
    pass


class UnknownCurriculumPathError(ValueError):
    """The material is classified under a path the curriculum does not have."""
    pass


class MaterialPermissionError(Exception):
    """The caller may not change this material."""
    pass


def approval_rate(approved: int, total: int) -> int:
    """Approval percentage rounded half up; 0 when nothing was uploaded."""
    if total == 0:
        return 0
    return int(approved * 100 / total + 0.5)


class MaterialService:
    """Service for material CRUD and moderation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, data: MaterialCreate, contributor: User) -> Material:
        """
        Store a new material as pending review.

        Raises:
            UnknownCurriculumPathError: If the hierarchy path is not in the curriculum
        """
        curriculum = CurriculumService(self.db)
        path = (data.class_name, data.subject, data.chapter, data.topic, data.subtopic)
        if not await curriculum.path_exists(*path):
            raise UnknownCurriculumPathError(
                f"Curriculum has no path {' > '.join(path)}"
            )

        material = Material(
            **data.model_dump(mode="json"),
            status=MaterialStatus.PENDING,
            contributor_id=contributor.id,
            contributor_name=contributor.full_name or "Anonymous",
        )
        self.db.add(material)
        await self.db.flush()
        await self.db.refresh(material)

        logger.info("Material %s submitted by %s", material.id, contributor.email)
        return material

    async def get(self, material_id: uuid.UUID) -> Material:
        result = await self.db.execute(select(Material).where(Material.id == material_id))
        material = result.scalar_one_or_none()
        if material is None:
            raise MaterialNotFoundError(f"Material {material_id} not found")
        return material

    async def list_materials(
        self,
        status: MaterialStatus | None = None,
        contributor_id: uuid.UUID | None = None,
        **hierarchy: str | None,
    ) -> list[Material]:
        """List materials, newest first, filtered by status, owner and hierarchy fields."""
        query = select(Material)
        if status is not None:
            query = query.where(Material.status == status)
        if contributor_id is not None:
            query = query.where(Material.contributor_id == contributor_id)
        for field, value in hierarchy.items():
            if value is not None:
                query = query.where(getattr(Material, field) == value)

        result = await self.db.execute(query.order_by(Material.upload_date.desc()))
        return list(result.scalars().all())

    async def review_queue(self) -> list[Material]:
        """Pending materials, oldest first."""
        result = await self.db.execute(
            select(Material)
            .where(Material.status == MaterialStatus.PENDING)
            .order_by(Material.upload_date.asc())
        )
        return list(result.scalars().all())

    async def set_status(self, material_id: uuid.UUID, status: MaterialStatus, moderator: User) -> Material:
        material = await self.get(material_id)
        material.status = status
        await self.db.flush()
        await self.db.refresh(material)

        logger.info("Material %s marked %s by %s", material_id, status.value, moderator.email)
        return material

    async def delete(self, material_id: uuid.UUID, user: User) -> None:
        """
        Delete a material.

        Moderators and admins may delete anything; a contributor only their
        own material while it is still pending.

        Raises:
            MaterialNotFoundError: If the material does not exist
            MaterialPermissionError: If the caller may not delete it
        """
        material = await self.get(material_id)
        is_reviewer = user.has_role(UserRole.MODERATOR, UserRole.ADMIN)
        owns_pending = (
            material.contributor_id == user.id
            and material.status == MaterialStatus.PENDING
        )
        if not (is_reviewer or owns_pending):
            raise MaterialPermissionError("Only moderators can delete reviewed or foreign materials")

        await self.db.delete(material)
        await self.db.flush()
        logger.info("Material %s deleted by %s", material_id, user.email)

    async def contributor_stats(self) -> list[ContributorStats]:
        """Moderation outcomes per contributor name, busiest first."""
        result = await self.db.execute(
            select(Material.contributor_name, Material.status)
        )
        counts: dict[str, dict[str, int]] = {}
        for name, status in result.all():
            entry = counts.setdefault(name or "Anonymous", {"total": 0, "approved": 0, "rejected": 0})
            entry["total"] += 1
            if status == MaterialStatus.APPROVED:
                entry["approved"] += 1
            elif status == MaterialStatus.REJECTED:
                entry["rejected"] += 1

        stats = [
            ContributorStats(
                contributor_name=name,
                total=entry["total"],
                approved=entry["approved"],
                rejected=entry["rejected"],
                approval_rate=approval_rate(entry["approved"], entry["total"]),
            )
            for name, entry in counts.items()
        ]
        return sorted(stats, key=lambda s: s.total, reverse=True)

    async def user_stats(self) -> list[UserStats]:
        """
        Upload totals and approval rate for every approved user.

        Users with no uploads are listed with zero counts. Sorted by total
        uploads, descending.
        """
        users_result = await self.db.execute(
            select(User).where(User.is_approved.is_(True))
        )
        users = users_result.scalars().all()

        materials_result = await self.db.execute(
            select(Material.contributor_id, Material.status)
            .where(Material.contributor_id.is_not(None))
        )
        totals: dict[uuid.UUID, list[int]] = {}
        for contributor_id, status in materials_result.all():
            entry = totals.setdefault(contributor_id, [0, 0])
            entry[0] += 1
            if status == MaterialStatus.APPROVED:
                entry[1] += 1

        stats = []
        for user in users:
            total, approved = totals.get(user.id, [0, 0])
            stats.append(UserStats(
                user_id=user.id,
                user_name=user.full_name or "Unknown",
                role=user.role_value,
                total_uploads=total,
                approved_uploads=approved,
                approval_rate=approval_rate(approved, total),
            ))
        return sorted(stats, key=lambda s: s.total_uploads, reverse=True)
