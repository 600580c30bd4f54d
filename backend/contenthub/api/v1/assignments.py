"""
Content Hub - Assignments API
Endpoints for assigning topics to contributors and tracking progress
"""
import uuid

from fastapi import APIRouter, HTTPException, status

from contenthub.api.deps import CurrentUser, DbSession, ReviewerUser
from contenthub.schemas.assignment import (
    AssignmentCreate,
    AssignmentResponse,
    AssignmentUpdate,
)
from contenthub.schemas.user import ContributorSummary
from contenthub.services.assignments import (
    AssignmentNotFoundError,
    AssignmentPermissionError,
    AssignmentService,
)

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.get("", response_model=list[AssignmentResponse])
async def list_assignments(
    reviewer: ReviewerUser,
    db: DbSession,
    class_name: str | None = None,
    subject: str | None = None,
):
    """
    List assignments, optionally scoped to a class and subject.
    """
    assignments = await AssignmentService(db).list_for_subject(class_name, subject)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get("/mine", response_model=list[AssignmentResponse])
async def my_assignments(current_user: CurrentUser, db: DbSession):
    """
    Assignments given to the current user.
    """
    assignments = await AssignmentService(db).list_for_contributor(current_user.id)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get("/contributors", response_model=list[ContributorSummary])
async def list_contributors(reviewer: ReviewerUser, db: DbSession):
    """
    Approved contributors and moderators who can take assignments.
    """
    users = await AssignmentService(db).eligible_contributors()
    return [ContributorSummary.model_validate(u) for u in users]


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(body: AssignmentCreate, reviewer: ReviewerUser, db: DbSession):
    """
    Create an assignment; the caller is recorded as the assigner.
    """
    assignment = await AssignmentService(db).create(body, reviewer)
    return AssignmentResponse.model_validate(assignment)


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: uuid.UUID,
    body: AssignmentUpdate,
    current_user: CurrentUser,
    db: DbSession,
):
    """
    Update an assignment.

    Moderators and admins may change any field; the assigned contributor may
    only update status and comments.
    """
    try:
        assignment = await AssignmentService(db).update(assignment_id, body, current_user)
    except AssignmentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assignment not found",
        )
    except AssignmentPermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    return AssignmentResponse.model_validate(assignment)
