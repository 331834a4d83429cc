"""Profile entity.

One durable row per principal describing its role and placement. The
role, school and classroom must agree with the principal's claims.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from genie.domain.model.common import DomainModel, utc_now
from genie.domain.value import ClassroomId, PrincipalId, Role, SchoolId
from genie.domain.value.types import Claims


class Profile(DomainModel):
    """Application-level record of a principal's role and placement."""

    id: PrincipalId
    role: Role
    email: Optional[str] = None
    full_name: Optional[str] = None
    school_id: Optional[SchoolId] = None
    classroom_id: Optional[ClassroomId] = None
    child_first_name: Optional[str] = None  # Parents only
    created_at: datetime = Field(default_factory=utc_now)

    def to_claims(self) -> Claims:
        """Claims bag that mirrors this profile."""
        return Claims(
            role=self.role,
            school_id=self.school_id,
            classroom_id=self.classroom_id,
        )
