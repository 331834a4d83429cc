"""Revoke invitation link use case."""

from typing import Literal, Self
from uuid import UUID

import logfire
from pydantic import BaseModel, model_validator

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import ForbiddenError, InvalidInvitationError
from genie.domain.model import Profile
from genie.domain.repository import UnitOfWork
from genie.domain.service import (
    AuthorizationService,
    InvitationAction,
    InvitationService,
    ProfileService,
    SchoolService,
)
from genie.domain.value import ClassroomId, InvitableRole, PrincipalId


class RevokeInvitationRequest(BaseModel):
    """Revoke either one token or every active link of a classroom and role."""

    requester_id: str  # Principal ID from session token
    token: str | None = None
    classroom_id: UUID | None = None
    intended_role: InvitableRole | None = None

    @model_validator(mode="after")
    def require_target(self) -> Self:
        """Require a token or a complete classroom+role pair."""
        if self.token and self.token.strip():
            return self
        if self.classroom_id is None or self.intended_role is None:
            raise ValueError("Missing token or classroom_id+intended_role")
        return self


class RevokeInvitationResponse(BaseModel):
    """Revoke invitation response."""

    ok: Literal[True] = True
    revoked: int = 0


class RevokeInvitationUseCase(BaseUseCase):
    """Use case expiring invitation links early (directors of the school only)."""

    def __init__(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        school_service: SchoolService,
        authorization_service: AuthorizationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation ledger service
            profile_service: Profile service (requester lookup)
            school_service: School service (classroom lookup)
            authorization_service: Invitation authorization matrix
            unit_of_work: Transaction boundary for the ledger write
        """
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.school_service = school_service
        self.authorization_service = authorization_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: RevokeInvitationRequest
    ) -> RevokeInvitationResponse:
        """Execute revoke flow.

        Revoking by token checks the token's classroom against the
        requester's school just like revoking by classroom does.

        Raises:
            ForbiddenError: Requester is not director of the owning school
            InvalidInvitationError: Token does not exist
            NotFoundError: Classroom does not exist
            StorageError: Ledger write or commit failed
        """
        requester_id = PrincipalId(UUID(request.requester_id))

        with logfire.span(
            "revoke_invitation",
            requester_id=str(requester_id),
            by_token=bool(request.token),
        ):
            requester = await self.profile_service.get_profile(requester_id)
            if requester is None:
                raise ForbiddenError("Profile not found")

            async with self.unit_of_work.transaction():
                if request.token and request.token.strip():
                    revoked = await self._revoke_token(requester, request.token)
                elif request.classroom_id is None or request.intended_role is None:
                    raise InvalidInvitationError("Missing revocation target")
                else:
                    revoked = await self._revoke_classroom(
                        requester,
                        ClassroomId(request.classroom_id),
                        request.intended_role,
                    )

            logfire.info(
                "Revocation complete",
                requester_id=str(requester_id),
                revoked=revoked,
            )
            return RevokeInvitationResponse(revoked=revoked)

    async def _revoke_token(self, requester: Profile, token: str) -> int:
        link = await self.invitation_service.find_by_token(token)
        if link is None:
            raise InvalidInvitationError()

        classroom = await self.school_service.get_classroom(link.classroom_id)
        self.authorization_service.authorize(
            InvitationAction.REVOKE, requester, classroom, link.intended_role
        )
        return int(await self.invitation_service.revoke_link(link))

    async def _revoke_classroom(
        self,
        requester: Profile,
        classroom_id: ClassroomId,
        intended_role: InvitableRole,
    ) -> int:
        classroom = await self.school_service.get_classroom(classroom_id)
        self.authorization_service.authorize(
            InvitationAction.REVOKE, requester, classroom, intended_role
        )
        return await self.invitation_service.revoke_active(classroom.id, intended_role)
