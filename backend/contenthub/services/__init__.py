"""Content Hub - Services initialization."""
from contenthub.services.auth import (
    AuthService,
    AuthenticationError,
    InvalidCredentialsError,
    AccountLockedError,
    AccountNotApprovedError,
    TokenError,
)
from contenthub.services.curriculum import (
    CurriculumService,
    CurriculumRepository,
    CurriculumPersistenceError,
    RevisionConflictError,
)

__all__ = [
    "AuthService",
    "AuthenticationError",
    "InvalidCredentialsError",
    "AccountLockedError",
    "AccountNotApprovedError",
    "TokenError",
    "CurriculumService",
    "CurriculumRepository",
    "CurriculumPersistenceError",
    "RevisionConflictError",
]
