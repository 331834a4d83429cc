"""Invitation ledger domain service."""

import secrets
from datetime import datetime, timedelta

import logfire
from pydantic import ValidationError

from genie.config import InvitationSettings
from genie.domain.error import (
    InvalidInvitationError,
    InvitationAlreadyUsedError,
    InvitationExpiredError,
)
from genie.domain.model import Classroom, InvitationLink
from genie.domain.model.common import utc_now
from genie.domain.repository import InvitationLinkRepository
from genie.domain.value import (
    ClassroomId,
    InvitableRole,
    InvitationToken,
    PrincipalId,
)

from .base import Service


def generate_token() -> InvitationToken:
    """Mint a new unguessable URL-safe token."""
    return InvitationToken(root=secrets.token_urlsafe(32))


class InvitationService(Service):
    """Domain service for the invitation link lifecycle."""

    def __init__(
        self,
        invitation_repository: InvitationLinkRepository,
        settings: InvitationSettings,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation ledger repository
            settings: Invitation settings (TTL, single-use policy)
        """
        self.invitation_repository = invitation_repository
        self.settings = settings

    async def ensure_link(
        self,
        classroom: Classroom,
        intended_role: InvitableRole,
        created_by: PrincipalId | None,
        now: datetime | None = None,
    ) -> tuple[InvitationLink, bool]:
        """Return the active link for a classroom and role, minting one if needed.

        Two concurrent calls may both miss and mint; the newest link wins on
        later lookups and the older one simply runs out its validity window.

        Args:
            classroom: Classroom the link grants access to
            intended_role: Role the link grants
            created_by: Issuing principal
            now: Reference time (defaults to current UTC time)

        Returns:
            Tuple of (link, created) where created is False on reuse
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.ensure_link",
            classroom_id=str(classroom.id),
            intended_role=intended_role.value,
        ):
            existing = await self.invitation_repository.find_active(
                classroom.id, intended_role, now
            )
            if existing:
                logfire.info(
                    "Reusing active invitation link",
                    token=existing.token.masked(),
                    expires_at=existing.expires_at.isoformat(),
                )
                return existing, False

            link = InvitationLink(
                token=generate_token(),
                school_id=classroom.school_id,
                classroom_id=classroom.id,
                intended_role=intended_role,
                created_by=created_by,
                expires_at=now + timedelta(days=self.settings.link_ttl_days),
                created_at=now,
            )
            saved = await self.invitation_repository.save(link)
            logfire.info(
                "Invitation link minted",
                token=saved.token.masked(),
                classroom_id=str(classroom.id),
                intended_role=intended_role.value,
            )
            return saved, True

    async def find_by_token(self, token: str) -> InvitationLink | None:
        """Look up a link by raw token, treating malformed tokens as absent."""
        try:
            parsed = InvitationToken(root=token)
        except ValidationError:
            logfire.warn("Malformed invitation token")
            return None
        return await self.invitation_repository.find_by_token(parsed)

    async def resolve(self, token: str, now: datetime | None = None) -> InvitationLink:
        """Resolve a token to a usable link.

        Args:
            token: Raw token from the caller
            now: Reference time (defaults to current UTC time)

        Returns:
            The link, guaranteed active at ``now``

        Raises:
            InvalidInvitationError: Token malformed or unknown
            InvitationExpiredError: Validity window passed or link revoked
            InvitationAlreadyUsedError: Single-use link already consumed
        """
        now = now or utc_now()
        with logfire.span("invitation_service.resolve", token=token[:8] + "..."):
            link = await self.find_by_token(token)
            if link is None:
                logfire.info("Invitation not found", token=token[:8] + "...")
                raise InvalidInvitationError()

            if link.is_expired(now):
                logfire.info(
                    "Invitation expired",
                    token=link.token.masked(),
                    expires_at=link.expires_at.isoformat(),
                )
                raise InvitationExpiredError()

            if link.used_at is not None:
                logfire.info("Invitation already used", token=link.token.masked())
                raise InvitationAlreadyUsedError()

            return link

    async def mark_consumed(
        self, link: InvitationLink, now: datetime | None = None
    ) -> InvitationLink:
        """Record a successful consume according to the link's reusability.

        PARENT links are left untouched. TEACHER links get ``used_at`` when
        the single-use policy is on.
        """
        if link.is_reusable or not self.settings.single_use_teacher_links:
            return link

        used = link.model_copy(update={"used_at": now or utc_now()})
        saved = await self.invitation_repository.save(used)
        logfire.info("Single-use invitation marked used", token=link.token.masked())
        return saved

    async def revoke_link(
        self, link: InvitationLink, now: datetime | None = None
    ) -> bool:
        """Expire one link now.

        Returns:
            True if the link was active and is now revoked, False for a no-op
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.revoke_link", token=link.token.masked()
        ):
            if not link.is_active(now):
                logfire.info("Invitation already inactive", token=link.token.masked())
                return False

            await self.invitation_repository.save(
                link.model_copy(update={"expires_at": now})
            )
            logfire.info("Invitation revoked", token=link.token.masked())
            return True

    async def revoke_active(
        self,
        classroom_id: ClassroomId,
        intended_role: InvitableRole,
        now: datetime | None = None,
    ) -> int:
        """Expire every active link for a classroom and role.

        Returns:
            Number of links revoked (0 is not an error)
        """
        now = now or utc_now()
        with logfire.span(
            "invitation_service.revoke_active",
            classroom_id=str(classroom_id),
            intended_role=intended_role.value,
        ):
            count = await self.invitation_repository.expire_active(
                classroom_id, intended_role, now
            )
            logfire.info(
                "Active invitations revoked",
                classroom_id=str(classroom_id),
                intended_role=intended_role.value,
                count=count,
            )
            return count
