"""
Content Hub - Authentication Service
Business logic for user registration, login, and token management
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from hashlib import sha256

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from contenthub.core.config import settings
from contenthub.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from contenthub.models.user import RefreshToken, User, UserRole, as_utc
from contenthub.schemas.user import TokenResponse, UserCreate

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base authentication error."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Invalid email or password."""
    pass


class AccountLockedError(AuthenticationError):
    """Account is locked due to failed attempts."""
    pass


class AccountNotApprovedError(AuthenticationError):
    """Account is waiting for an admin to approve it, or was rejected."""
    pass


class TokenError(AuthenticationError):
    """Token validation error."""
    pass


class AuthService:
    """Service for authentication operations."""

    MAX_FAILED_ATTEMPTS = 5
    LOCKOUT_DURATION_MINUTES = 30

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register_user(self, user_data: UserCreate) -> User:
        """
        Register a new contributor account awaiting admin approval.

        Raises:
            ValueError: If email already exists
        """
        existing = await self.db.execute(
            select(User).where(User.email == user_data.email)
        )
        if existing.scalar_one_or_none():
            raise ValueError("Email already registered")

        user = User(
            email=user_data.email,
            hashed_password=get_password_hash(user_data.password),
            full_name=user_data.full_name,
            role=UserRole.CONTRIBUTOR,
            is_active=True,
            is_approved=False,
        )

        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)

        logger.info("Registered %s, pending approval", user.email)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User email
            password: User password

        Returns:
            Authenticated user

        Raises:
            InvalidCredentialsError: If credentials are invalid
            AccountLockedError: If account is locked
            AccountNotApprovedError: If an admin has not approved the account
        """
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        user = result.scalar_one_or_none()

        if not user:
            raise InvalidCredentialsError("Invalid email or password")

        now = datetime.now(timezone.utc)
        if user.locked_until and as_utc(user.locked_until) > now:
            remaining = (as_utc(user.locked_until) - now).seconds // 60
            raise AccountLockedError(
                f"Account locked. Try again in {remaining} minutes."
            )

        if not verify_password(password, user.hashed_password):
            user.failed_login_attempts += 1

            if user.failed_login_attempts >= self.MAX_FAILED_ATTEMPTS:
                user.locked_until = now + timedelta(minutes=self.LOCKOUT_DURATION_MINUTES)
                logger.warning("Locked %s after %d failed logins", email, user.failed_login_attempts)

            # Committed here: the request session rolls back once the error propagates
            await self.db.commit()
            raise InvalidCredentialsError("Invalid email or password")

        if not user.is_active or not user.is_approved:
            raise AccountNotApprovedError("Account is awaiting admin approval")

        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login = now
        await self.db.flush()

        return user

    async def create_tokens(self, user: User) -> TokenResponse:
        """Create access and refresh tokens for a user."""
        access_token = create_access_token(
            subject=str(user.id),
            additional_claims={"role": user.role_value}
        )
        refresh_token = create_refresh_token(subject=str(user.id))

        # Store refresh token hash
        token_hash = sha256(refresh_token.encode()).hexdigest()
        refresh_token_record = RefreshToken(
            user_id=user.id,
            token_hash=token_hash,
            expires_at=datetime.now(timezone.utc) + timedelta(
                days=settings.REFRESH_TOKEN_EXPIRE_DAYS
            )
        )
        self.db.add(refresh_token_record)
        await self.db.flush()

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )

    async def refresh_tokens(self, refresh_token: str) -> TokenResponse:
        """
        Refresh access token using refresh token.

        Raises:
            TokenError: If refresh token is invalid or expired
        """
        user_id = verify_token(refresh_token, token_type="refresh")
        if not user_id:
            raise TokenError("Invalid refresh token")

        token_hash = sha256(refresh_token.encode()).hexdigest()
        result = await self.db.execute(
            select(RefreshToken).where(
                RefreshToken.token_hash == token_hash,
                RefreshToken.revoked_at.is_(None)
            )
        )
        token_record = result.scalar_one_or_none()

        if not token_record or token_record.is_expired:
            raise TokenError("Refresh token expired or revoked")

        user = await self.get_user_by_id(user_id)
        if not user or not user.is_active:
            raise TokenError("User not found or inactive")

        # Rotate: the old token is single-use
        token_record.revoked_at = datetime.now(timezone.utc)

        return await self.create_tokens(user)

    async def logout(self, refresh_token: str) -> None:
        """Logout user by revoking refresh token."""
        token_hash = sha256(refresh_token.encode()).hexdigest()
        result = await self.db.execute(
            select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        )
        token_record = result.scalar_one_or_none()

        if token_record:
            token_record.revoked_at = datetime.now(timezone.utc)
            await self.db.flush()

    async def get_user_by_id(self, user_id: str | uuid.UUID) -> User | None:
        """Get user by ID."""
        if isinstance(user_id, str):
            try:
                user_id = uuid.UUID(user_id)
            except ValueError:
                return None

        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()
