"""PostgreSQL implementation of the invitation ledger."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from genie.domain.model import InvitationLink
from genie.domain.repository import InvitationLinkRepository
from genie.domain.value import ClassroomId, InvitableRole, InvitationToken
from genie.persistence.database import storage_errors
from genie.persistence.mappers import invitation_link_to_dict, row_to_invitation_link
from genie.persistence.tables import invitation_links_table


class PostgresInvitationLinkRepository(InvitationLinkRepository):
    """PostgreSQL implementation of InvitationLinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ):
        return and_(
            invitation_links_table.c.classroom_id == classroom_id,
            invitation_links_table.c.intended_role == intended_role.value,
            invitation_links_table.c.used_at.is_(None),
            invitation_links_table.c.expires_at > now,
        )

    async def find_by_token(self, token: InvitationToken) -> Optional[InvitationLink]:
        """Find a link by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Link if found, None otherwise
        """
        stmt = select(invitation_links_table).where(
            invitation_links_table.c.token == token.root
        )
        with storage_errors("invitation.find_by_token"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_invitation_link(dict(row)) if row else None

    async def find_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> Optional[InvitationLink]:
        """Find the newest active link for a classroom and role.

        Served by idx_invitation_links_active.
        """
        stmt = (
            select(invitation_links_table)
            .where(self._active(classroom_id, intended_role, now))
            .order_by(invitation_links_table.c.created_at.desc())
            .limit(1)
        )
        with storage_errors("invitation.find_active"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_invitation_link(dict(row)) if row else None

    async def save(self, link: InvitationLink) -> InvitationLink:
        """Save a link (create or update by token).

        Args:
            link: Link to save

        Returns:
            Saved link
        """
        link_dict = invitation_link_to_dict(link)

        with storage_errors("invitation.save"):
            existing = await self.session.execute(
                select(invitation_links_table.c.token).where(
                    invitation_links_table.c.token == link.token.root
                )
            )
            if existing.first():
                stmt = (
                    update(invitation_links_table)
                    .where(invitation_links_table.c.token == link.token.root)
                    .values(**link_dict)
                )
            else:
                stmt = insert(invitation_links_table).values(**link_dict)
            await self.session.execute(stmt)
            await self.session.flush()
        return link

    async def expire_active(
        self, classroom_id: ClassroomId, intended_role: InvitableRole, now: datetime
    ) -> int:
        """Set expires_at = now on every active link for the pair."""
        stmt = (
            update(invitation_links_table)
            .where(self._active(classroom_id, intended_role, now))
            .values(expires_at=now)
        )
        with storage_errors("invitation.expire_active"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount or 0
