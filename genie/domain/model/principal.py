"""Principal entity: an authenticated identity in the identity store."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from genie.domain.model.common import DomainModel, utc_now
from genie.domain.value import PrincipalId
from genie.domain.value.types import Claims


class Principal(DomainModel):
    """Authenticated identity with a mutable claims bag.

    ``user_metadata`` is whatever the signup flow recorded (first and last
    name, full name). ``claims`` is attached to every session token minted
    for the principal and is only written by invitation consumption and
    onboarding.
    """

    id: PrincipalId
    email: Optional[str] = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    claims: Claims = Field(default_factory=Claims)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def display_name(self) -> Optional[str]:
        """Full name merged from signup metadata, if any."""
        parts = [
            str(self.user_metadata.get(key) or "").strip()
            for key in ("first_name", "last_name")
        ]
        merged = " ".join(part for part in parts if part)
        if merged:
            return merged
        full_name = str(self.user_metadata.get("full_name") or "").strip()
        return full_name or None
