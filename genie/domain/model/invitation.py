"""Invitation link entity.

An invitation link grants whoever holds its token a role inside one
classroom of one school. Links live in the invitation ledger and are never
deleted; they are deactivated by expiry, revocation (expiry moved to now)
or, for single-use kinds, by being marked used.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from genie.domain.model.common import DomainModel, utc_now
from genie.domain.value import (
    ClassroomId,
    InvitableRole,
    InvitationToken,
    PrincipalId,
    SchoolId,
)


class InvitationLink(DomainModel):
    """Invitation link entity.

    Business rules:
    - Active iff not used and not yet expired
    - PARENT links are shared by a whole classroom and never marked used
    - At most one active link per (classroom, intended role), enforced softly
      by the issuer reusing the active one
    """

    token: InvitationToken
    school_id: SchoolId
    classroom_id: ClassroomId
    intended_role: InvitableRole
    created_by: Optional[PrincipalId] = None
    expires_at: datetime
    used_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_reusable(self) -> bool:
        """Whether consuming this link leaves it active."""
        return self.intended_role == InvitableRole.PARENT

    def is_active(self, now: datetime) -> bool:
        """Whether the link can still be previewed and consumed at ``now``."""
        return self.used_at is None and now < self.expires_at

    def is_expired(self, now: datetime) -> bool:
        """Whether the validity window has passed (revocation included)."""
        return now >= self.expires_at
