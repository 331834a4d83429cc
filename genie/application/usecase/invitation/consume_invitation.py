"""Consume invitation use case."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import (
    InvalidInvitationError,
    NotFoundError,
    UnauthenticatedError,
)
from genie.domain.model.common import utc_now
from genie.domain.repository import UnitOfWork
from genie.domain.service import (
    IdentityService,
    InvitationService,
    ProfileService,
    SchoolService,
)
from genie.domain.value import PrincipalId, Role


class ConsumeInvitationRequest(BaseModel):
    """Consume invitation request."""

    principal_id: str  # Principal ID from session token
    token: str
    child_first_name: str | None = Field(default=None, max_length=100)


class ConsumeInvitationResponse(BaseModel):
    """Role and placement granted by the invitation."""

    ok: Literal[True] = True
    role: Role
    school_id: UUID
    classroom_id: UUID


class ConsumeInvitationUseCase(BaseUseCase):
    """Use case promoting an authenticated principal through an invitation.

    Profile, claims and the used-at mark are written in one transaction and
    committed together before the response is built, or rolled back
    together.

    Claims embedded in the caller's current session token stay stale until
    the caller refreshes its session.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        identity_service: IdentityService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation ledger service
            profile_service: Profile service
            identity_service: Identity store service (claims)
            school_service: School service (classroom check)
            unit_of_work: Transaction boundary for the promotion
        """
        self.invitation_service = invitation_service
        self.profile_service = profile_service
        self.identity_service = identity_service
        self.school_service = school_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: ConsumeInvitationRequest
    ) -> ConsumeInvitationResponse:
        """Execute consume invitation flow.

        Steps:
        1. Load the calling principal from the identity store
        2. Resolve the token (same rules as preview)
        3. Check the classroom still belongs to the invitation's school
        4. Create or re-scope the profile
        5. Write matching claims to the identity store
        6. Mark single-use links used
        7. Commit all three writes

        Raises:
            UnauthenticatedError: Session names an unknown principal
            InvalidInvitationError: Unknown, malformed or inconsistent token
            InvitationExpiredError: Link expired or revoked
            InvitationAlreadyUsedError: Single-use link already consumed
            NotFoundError: Invitation's classroom no longer exists
            StorageError: A write or the commit failed after validation passed
        """
        principal_id = PrincipalId(UUID(request.principal_id))

        with logfire.span(
            "consume_invitation",
            principal_id=str(principal_id),
            token=request.token[:8] + "...",
        ):
            try:
                principal = await self.identity_service.get_principal(principal_id)
            except NotFoundError as e:
                raise UnauthenticatedError("Unknown principal") from e

            now = utc_now()
            link = await self.invitation_service.resolve(request.token, now=now)

            classroom = await self.school_service.get_classroom(link.classroom_id)
            if classroom.school_id != link.school_id:
                logfire.error(
                    "Invitation school does not own its classroom",
                    token=link.token.masked(),
                    classroom_id=str(classroom.id),
                )
                raise InvalidInvitationError()

            role = link.intended_role.role
            async with self.unit_of_work.transaction():
                profile = await self.profile_service.promote(
                    principal,
                    role=role,
                    school_id=link.school_id,
                    classroom_id=link.classroom_id,
                    child_first_name=request.child_first_name,
                )
                await self.identity_service.update_claims(
                    principal.id, profile.to_claims()
                )
                await self.invitation_service.mark_consumed(link, now=now)

            logfire.info(
                "Invitation consumed",
                principal_id=str(principal.id),
                role=role.value,
                classroom_id=str(link.classroom_id),
            )
            return ConsumeInvitationResponse(
                role=role,
                school_id=link.school_id,
                classroom_id=link.classroom_id,
            )
