"""
Content Hub - Materials API
Endpoints for submitting, browsing and moderating learning materials
"""
import uuid
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from contenthub.api.deps import CurrentUser, DbSession, ReviewerUser
from contenthub.core.constants import BLOOMS_DESCRIPTIONS
from contenthub.models.material import BloomsLevel, MaterialStatus
from contenthub.models.user import UserRole
from contenthub.schemas.material import (
    BloomsLevelInfo,
    ContributorStats,
    MaterialCreate,
    MaterialResponse,
    MaterialStatusUpdate,
)
from contenthub.services.curriculum import CurriculumPersistenceError
from contenthub.services.materials import (
    MaterialNotFoundError,
    MaterialPermissionError,
    MaterialService,
    UnknownCurriculumPathError,
)

router = APIRouter(prefix="/materials", tags=["Materials"])


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a material",
    description="Submit a material for review. The hierarchy path must exist in the curriculum.",
)
async def submit_material(body: MaterialCreate, current_user: CurrentUser, db: DbSession):
    try:
        material = await MaterialService(db).submit(body, current_user)
    except UnknownCurriculumPathError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except CurriculumPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        )
    return MaterialResponse.model_validate(material)


@router.get("", response_model=list[MaterialResponse])
async def list_materials(
    current_user: CurrentUser,
    db: DbSession,
    material_status: Annotated[MaterialStatus | None, Query(alias="status")] = None,
    class_name: str | None = None,
    subject: str | None = None,
    chapter: str | None = None,
    topic: str | None = None,
    subtopic: str | None = None,
):
    """
    List materials, newest first.

    Contributors see approved materials and their own submissions; moderators
    and admins see everything.
    """
    service = MaterialService(db)
    hierarchy = {
        "class_name": class_name,
        "subject": subject,
        "chapter": chapter,
        "topic": topic,
        "subtopic": subtopic,
    }

    materials = await service.list_materials(status=material_status, **hierarchy)
    if not current_user.has_role(UserRole.MODERATOR, UserRole.ADMIN):
        materials = [
            m for m in materials
            if m.status == MaterialStatus.APPROVED or m.contributor_id == current_user.id
        ]
    return [MaterialResponse.model_validate(m) for m in materials]


@router.get("/blooms-levels", response_model=list[BloomsLevelInfo])
async def blooms_levels(current_user: CurrentUser):
    """
    Bloom's levels a material can be tagged with, in ascending order.
    """
    return [
        BloomsLevelInfo(level=level, description=BLOOMS_DESCRIPTIONS[level.value])
        for level in BloomsLevel
    ]


@router.get("/review-queue", response_model=list[MaterialResponse])
async def review_queue(reviewer: ReviewerUser, db: DbSession):
    """
    Pending materials, oldest first.
    """
    materials = await MaterialService(db).review_queue()
    return [MaterialResponse.model_validate(m) for m in materials]


@router.get("/stats/contributors", response_model=list[ContributorStats])
async def contributor_stats(reviewer: ReviewerUser, db: DbSession):
    """
    Approved/rejected counts and approval rate per contributor.
    """
    return await MaterialService(db).contributor_stats()


@router.patch("/{material_id}/status", response_model=MaterialResponse)
async def update_material_status(
    material_id: uuid.UUID,
    body: MaterialStatusUpdate,
    reviewer: ReviewerUser,
    db: DbSession,
):
    """
    Approve or reject a material.
    """
    try:
        material = await MaterialService(db).set_status(material_id, body.status, reviewer)
    except MaterialNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Material not found",
        )
    return MaterialResponse.model_validate(material)


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(material_id: uuid.UUID, current_user: CurrentUser, db: DbSession) -> None:
    """
    Delete a material.
    """
    try:
        await MaterialService(db).delete(material_id, current_user)
    except MaterialNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Material not found",
        )
    except MaterialPermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
