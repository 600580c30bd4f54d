"""
Content Hub - User Schemas
Pydantic schemas for user registration, authentication, and profiles
"""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from contenthub.models.user import UserRole


# ============================================================================
# Base Schemas
# ============================================================================

class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    full_name: Annotated[str, Field(min_length=1, max_length=200)]


# ============================================================================
# Registration & Authentication
# ============================================================================

class UserCreate(UserBase):
    """Schema for user registration."""
    password: Annotated[str, Field(min_length=8, max_length=72)]

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not any(c.isupper() for c in v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not any(c.islower() for c in v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("Password must contain at least one digit")
        return v


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Schema for authentication token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 1800  # 30 minutes in seconds


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""
    refresh_token: str


# ============================================================================
# User Response Schemas
# ============================================================================

class UserResponse(UserBase):
    """Schema for user response (public data)."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    role: UserRole
    is_active: bool
    is_approved: bool
    created_at: datetime | None = None


class UserApprove(BaseModel):
    """Role granted when an admin approves a pending account."""
    role: UserRole = UserRole.CONTRIBUTOR

    @field_validator("role")
    @classmethod
    def no_admin_grants(cls, v: UserRole) -> UserRole:
        if v == UserRole.ADMIN:
            raise ValueError("Admin accounts cannot be granted through approval")
        return v


class ContributorSummary(BaseModel):
    """Approved user who can receive assignments."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    full_name: str
    role: UserRole


class UserStats(BaseModel):
    """Upload statistics for one approved user."""
    user_id: uuid.UUID
    user_name: str
    role: UserRole
    total_uploads: int
    approved_uploads: int
    approval_rate: int  # Rounded percentage
