"""Domain value objects for Genie."""

from genie.domain.value.identifiers import ClassroomId, PrincipalId, SchoolId
from genie.domain.value.types import (
    Claims,
    Grade,
    InvitableRole,
    InvitationToken,
    Role,
    normalize_role,
)

__all__ = [
    # Identifiers
    "PrincipalId",
    "SchoolId",
    "ClassroomId",
    # Types
    "Claims",
    "Grade",
    "InvitableRole",
    "InvitationToken",
    "Role",
    "normalize_role",
]
