"""Invitation ledger repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from genie.domain.model.invitation import InvitationLink
from genie.domain.value import ClassroomId, InvitableRole, InvitationToken


class InvitationLinkRepository(ABC):
    """Repository for the invitation ledger.

    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> InvitationLink | None:
        """Find a link by its token.

        This is the only lookup available to unauthenticated callers, so it
        must stay an exact-match read of a single row.

        Args:
            token: The invitation token

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> InvitationLink | None:
        """Find the newest active link for a classroom and role.

        Args:
            classroom_id: Target classroom
            intended_role: Role the link grants
            now: Reference time for the active predicate

        Returns:
            The most recently created active link, None if there is none
        """
        pass

    @abstractmethod
    async def save(self, link: InvitationLink) -> InvitationLink:
        """Save a link (create or update by token).

        Args:
            link: The link to save

        Returns:
            The saved link
        """
        pass

    @abstractmethod
    async def expire_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> int:
        """Set ``expires_at = now`` on every active link for the pair.

        Args:
            classroom_id: Target classroom
            intended_role: Role the links grant
            now: Revocation time

        Returns:
            Number of links revoked
        """
        pass
