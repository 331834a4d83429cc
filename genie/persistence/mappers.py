"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from genie.domain.model import Classroom, InvitationLink, Principal, Profile, School
from genie.domain.value import (
    Claims,
    ClassroomId,
    Grade,
    InvitableRole,
    InvitationToken,
    PrincipalId,
    Role,
    SchoolId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_principal(row: Dict[str, Any]) -> Principal:
    """Convert database row to Principal domain model."""
    return Principal(
        id=PrincipalId(_uuid(row["id"])),
        email=row.get("email"),
        user_metadata=row.get("user_metadata") or {},
        claims=Claims.model_validate(row.get("claims") or {}),
        created_at=row["created_at"],
    )


def principal_to_dict(principal: Principal) -> Dict[str, Any]:
    """Convert Principal domain model to database dict."""
    return {
        "id": principal.id,
        "email": principal.email,
        "user_metadata": principal.user_metadata,
        "claims": claims_to_json(principal.claims),
        "created_at": principal.created_at,
    }


def claims_to_json(claims: Claims) -> Dict[str, Any]:
    """Serialize a claims bag for the JSONB column."""
    return claims.model_dump(mode="json")


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    school_id = _uuid(row.get("school_id"))
    classroom_id = _uuid(row.get("classroom_id"))
    return Profile(
        id=PrincipalId(_uuid(row["id"])),
        role=Role(row["role"]),
        email=row.get("email"),
        full_name=row.get("full_name"),
        school_id=SchoolId(school_id) if school_id else None,
        classroom_id=ClassroomId(classroom_id) if classroom_id else None,
        child_first_name=row.get("child_first_name"),
        created_at=row["created_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    data = profile.model_dump()
    data["role"] = profile.role.value
    return data


def row_to_school(row: Dict[str, Any]) -> School:
    """Convert database row to School domain model."""
    return School(
        id=SchoolId(_uuid(row["id"])),
        name=row["name"],
        created_at=row["created_at"],
    )


def school_to_dict(school: School) -> Dict[str, Any]:
    """Convert School domain model to database dict."""
    return school.model_dump()


def row_to_classroom(row: Dict[str, Any]) -> Classroom:
    """Convert database row to Classroom domain model."""
    return Classroom(
        id=ClassroomId(_uuid(row["id"])),
        school_id=SchoolId(_uuid(row["school_id"])),
        name=row["name"],
        grade=Grade(row["grade"]),
        created_at=row["created_at"],
    )


def classroom_to_dict(classroom: Classroom) -> Dict[str, Any]:
    """Convert Classroom domain model to database dict."""
    data = classroom.model_dump()
    data["grade"] = classroom.grade.value
    return data


def row_to_invitation_link(row: Dict[str, Any]) -> InvitationLink:
    """Convert database row to InvitationLink domain model."""
    created_by = _uuid(row.get("created_by"))
    return InvitationLink(
        token=InvitationToken(root=row["token"]),
        school_id=SchoolId(_uuid(row["school_id"])),
        classroom_id=ClassroomId(_uuid(row["classroom_id"])),
        intended_role=InvitableRole(row["intended_role"]),
        created_by=PrincipalId(created_by) if created_by else None,
        expires_at=row["expires_at"],
        used_at=row.get("used_at"),
        created_at=row["created_at"],
    )


def invitation_link_to_dict(link: InvitationLink) -> Dict[str, Any]:
    """Convert InvitationLink domain model to database dict."""
    data = link.model_dump()
    data["token"] = link.token.root
    data["intended_role"] = link.intended_role.value
    return data
