"""In-memory invitation ledger for testing."""

from datetime import datetime
from typing import Optional

from genie.domain.model.invitation import InvitationLink
from genie.domain.repository.invitation import InvitationLinkRepository
from genie.domain.value import ClassroomId, InvitableRole, InvitationToken


class InMemoryInvitationLinkRepository(InvitationLinkRepository):
    """In-memory implementation of InvitationLinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[str, InvitationLink] = {}

    async def find_by_token(self, token: InvitationToken) -> Optional[InvitationLink]:
        """Find a link by its token."""
        return self._links.get(token.root)

    async def find_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> Optional[InvitationLink]:
        """Find the newest active link for a classroom and role."""
        matches = [
            link
            for link in self._links.values()
            if link.classroom_id == classroom_id
            and link.intended_role == intended_role
            and link.is_active(now)
        ]
        if not matches:
            return None
        return max(matches, key=lambda link: link.created_at)

    async def save(self, link: InvitationLink) -> InvitationLink:
        """Save a link (create or update by token)."""
        self._links[link.token.root] = link
        return link

    async def expire_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> int:
        """Set expires_at = now on every active link for the pair."""
        count = 0
        for token, link in list(self._links.items()):
            if (
                link.classroom_id == classroom_id
                and link.intended_role == intended_role
                and link.is_active(now)
            ):
                self._links[token] = link.model_copy(update={"expires_at": now})
                count += 1
        return count
