"""
Content Hub - Admin API
Account approval and per-user upload statistics
"""
import uuid

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from contenthub.api.deps import AdminUser, DbSession
from contenthub.models.user import User
from contenthub.schemas.user import UserApprove, UserResponse, UserStats
from contenthub.services.materials import MaterialService

router = APIRouter(prefix="/admin", tags=["Admin"])


async def _get_user_or_404(db: DbSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.get(
    "/users/pending",
    response_model=list[UserResponse],
    summary="List pending accounts",
)
async def list_pending_users(admin: AdminUser, db: DbSession) -> list[UserResponse]:
    """Active accounts that have not been approved yet, oldest first."""
    result = await db.execute(
        select(User)
        .where(User.is_approved.is_(False), User.is_active.is_(True))
        .order_by(User.created_at)
    )
    return [UserResponse.model_validate(u) for u in result.scalars().all()]


@router.post(
    "/users/{user_id}/approve",
    response_model=UserResponse,
    summary="Approve an account",
    description="Approve a pending account as contributor (default) or moderator.",
)
async def approve_user(
    user_id: uuid.UUID,
    admin: AdminUser,
    db: DbSession,
    body: UserApprove | None = None,
) -> UserResponse:
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot approve their own account",
        )
    user = await _get_user_or_404(db, user_id)
    # Only pending (or previously rejected) accounts; approving never re-roles an active member
    if user.is_approved:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Account is already approved",
        )
    user.is_approved = True
    user.is_active = True
    user.role = (body or UserApprove()).role.value

    await db.flush()
    await db.refresh(user)
    return UserResponse.model_validate(user)


@router.post(
    "/users/{user_id}/reject",
    response_model=UserResponse,
    summary="Reject an account",
    description="Deactivate the account. The row is kept so the email stays blocked.",
)
async def reject_user(
    user_id: uuid.UUID,
    admin: AdminUser,
    db: DbSession,
) -> UserResponse:
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot reject their own account",
        )
    user = await _get_user_or_404(db, user_id)
    user.is_approved = False
    user.is_active = False

    await db.flush()
    await db.refresh(user)
    return UserResponse.model_validate(user)


@router.get(
    "/stats/users",
    response_model=list[UserStats],
    summary="Upload statistics per user",
)
async def user_stats(admin: AdminUser, db: DbSession) -> list[UserStats]:
    return await MaterialService(db).user_stats()
