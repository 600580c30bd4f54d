"""
Content Hub - Account API
Contributor sign-up, and sessions for approved accounts
"""
from fastapi import APIRouter, HTTPException, status

from contenthub.api.deps import CurrentUser, DbSession
from contenthub.schemas.user import (
    TokenRefresh,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from contenthub.services.auth import (
    AccountLockedError,
    AccountNotApprovedError,
    AuthenticationError,
    AuthService,
    TokenError,
)

router = APIRouter(prefix="/auth", tags=["Accounts"])

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _session_refused(error: AuthenticationError) -> HTTPException:
    """
    Map a refused sign-in or refresh onto a response.

    A pending account gets 403 so the client can show the approval notice;
    bad credentials and dead tokens get 401 with a bearer challenge.
    """
    if isinstance(error, AccountNotApprovedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, AccountLockedError):
        return HTTPException(status_code=status.HTTP_423_LOCKED, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=str(error),
        headers=_BEARER_CHALLENGE,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up as a contributor",
    description=(
        "New accounts start as unapproved contributors. "
        "Signing in is refused until an admin approves the account."
    ),
)
async def register(body: UserCreate, db: DbSession) -> UserResponse:
    try:
        account = await AuthService(db).register_user(body)
    except ValueError as e:
        # Taken email; the row of a rejected account still holds it
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UserResponse.model_validate(account)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Sign in",
    description=(
        "Issue an access/refresh token pair for an approved, active account. "
        "Pending accounts get 403; repeated wrong passwords lock the account (423)."
    ),
)
async def login(body: UserLogin, db: DbSession) -> TokenResponse:
    service = AuthService(db)
    try:
        account = await service.authenticate(email=body.email, password=body.password)
    except AuthenticationError as e:
        raise _session_refused(e)
    return await service.create_tokens(account)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Rotate the session tokens",
    description="Trade a live refresh token for a new pair. The old refresh token is revoked.",
)
async def refresh(body: TokenRefresh, db: DbSession) -> TokenResponse:
    try:
        return await AuthService(db).refresh_tokens(body.refresh_token)
    except TokenError as e:
        raise _session_refused(e)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
)
async def logout(body: TokenRefresh, db: DbSession) -> None:
    """Revoke the refresh token. Unknown tokens are ignored."""
    await AuthService(db).logout(body.refresh_token)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current account",
    description="Profile, role and approval state of the signed-in account.",
)
async def me(current_user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(current_user)
