"""Content Hub - Models initialization."""
from contenthub.models.user import User, RefreshToken, UserRole
from contenthub.models.curriculum import CurriculumDocument
from contenthub.models.material import (
    Material,
    MaterialStatus,
    MaterialType,
    BloomsLevel,
)
from contenthub.models.assignment import Assignment, AssignmentStatus


__all__ = [
    # User models
    "User",
    "RefreshToken",
    "UserRole",
    # Curriculum models
    "CurriculumDocument",
    # Material models
    "Material",
    "MaterialStatus",
    "MaterialType",
    "BloomsLevel",
    # Assignment models
    "Assignment",
    "AssignmentStatus",
]
