"""Ensure invitation link use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from genie.application.usecase.base import BaseUseCase
from genie.config import InvitationSettings
from genie.domain.error import ForbiddenError
from genie.domain.repository import UnitOfWork
from genie.domain.service import (
    AuthorizationService,
    InvitationAction,
    InvitationService,
    ProfileService,
    SchoolService,
)
from genie.domain.value import ClassroomId, InvitableRole, PrincipalId
from genie.util.links import build_invite_url


class EnsureInvitationLinkRequest(BaseModel):
    """Ensure invitation link request."""

    requester_id: str  # Principal ID from session token
    classroom_id: UUID
    intended_role: InvitableRole


class EnsureInvitationLinkResponse(BaseModel):
    """Active invitation link for the requested classroom and role."""

    token: str
    expires_at: datetime
    intended_role: InvitableRole
    invite_url: str


class EnsureInvitationLinkUseCase(BaseUseCase):
    """Use case returning the active link for a classroom, minting one if needed.

    Repeated calls return the same token until it expires or is revoked.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        school_service: SchoolService,
        authorization_service: AuthorizationService,
        settings: InvitationSettings,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation ledger service
            profile_service: Profile service (requester lookup)
            school_service: School service (classroom lookup)
            authorization_service: Invitation authorization matrix
            settings: Invitation settings (deep link form)
            unit_of_work: Transaction boundary for the ledger write
        """
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.school_service = school_service
        self.authorization_service = authorization_service
        self.settings = settings
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: EnsureInvitationLinkRequest
    ) -> EnsureInvitationLinkResponse:
        """Execute ensure invitation link flow.

        Steps:
        1. Load requester profile (no profile means forbidden)
        2. Load target classroom
        3. Check the authorization matrix
        4. Reuse the active link or mint a new one

        Raises:
            ForbiddenError: Requester may not issue this link
            NotFoundError: Classroom does not exist
            StorageError: Ledger write or commit failed
        """
        requester_id = PrincipalId(UUID(request.requester_id))

        with logfire.span(
            "ensure_invitation_link",
            requester_id=str(requester_id),
            classroom_id=str(request.classroom_id),
            intended_role=request.intended_role.value,
        ):
            requester = await self.profile_service.get_profile(requester_id)
            if requester is None:
                raise ForbiddenError("Profile not found")

            classroom = await self.school_service.get_classroom(
                ClassroomId(request.classroom_id)
            )

            self.authorization_service.authorize(
                InvitationAction.ISSUE, requester, classroom, request.intended_role
            )

            async with self.unit_of_work.transaction():
                link, created = await self.invitation_service.ensure_link(
                    classroom, request.intended_role, created_by=requester_id
                )
            logfire.info(
                "Invitation link ensured",
                token=link.token.masked(),
                created=created,
            )

            return EnsureInvitationLinkResponse(
                token=link.token.root,
                expires_at=link.expires_at,
                intended_role=link.intended_role,
                invite_url=build_invite_url(link.token.root, self.settings),
            )
