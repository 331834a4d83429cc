"""Preview invitation use case."""

from datetime import datetime
from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel

from genie.application.usecase.base import BaseUseCase
from genie.domain.model import InvitationLink
from genie.domain.service import InvitationService, SchoolService
from genie.domain.value import Grade, InvitableRole


class PreviewInvitationRequest(BaseModel):
    """Preview invitation request."""

    token: str


class ClassroomSummary(BaseModel):
    """Classroom details shown on the signup screen."""

    id: UUID
    name: str
    grade: Grade


class PreviewInvitationResponse(BaseModel):
    """Public projection of an invitation link.

    Never carries ``used_at`` or the creator's id.
    """

    ok: Literal[True] = True
    token: str
    school_id: UUID
    classroom_id: UUID
    intended_role: InvitableRole
    expires_at: datetime
    classroom: ClassroomSummary | None = None


class PreviewInvitationUseCase(BaseUseCase):
    """Use case resolving a token for a not-yet-provisioned visitor.

    The caller needs no privileges: knowing the token is the credential, and
    the lookup touches exactly the one row that token names.
    """

    def __init__(
        self, invitation_service: InvitationService, school_service: SchoolService
    ) -> None:
        """Initialize preview invitation use case.

        Args:
            invitation_service: Invitation ledger service
            school_service: School service (classroom summary)
        """
        self.invitation_service = invitation_service
        self.school_service = school_service

    async def execute(
        self, request: PreviewInvitationRequest
    ) -> PreviewInvitationResponse:
        """Resolve a token to its public preview.

        Raises:
            InvalidInvitationError: Unknown or malformed token
            InvitationExpiredError: Link expired or revoked
            InvitationAlreadyUsedError: Single-use link already consumed
        """
        with logfire.span(
            "preview_invitation.execute", token=request.token[:8] + "..."
        ):
            link = await self.invitation_service.resolve(request.token)
            return await self._project(link)

    async def _project(self, link: InvitationLink) -> PreviewInvitationResponse:
        classroom = await self.school_service.find_classroom(link.classroom_id)
        summary = (
            ClassroomSummary(
                id=classroom.id, name=classroom.name, grade=classroom.grade
            )
            if classroom
            else None
        )

        logfire.info(
            "Invitation previewed",
            token=link.token.masked(),
            intended_role=link.intended_role.value,
            classroom_id=str(link.classroom_id),
        )
        return PreviewInvitationResponse(
            token=link.token.root,
            school_id=link.school_id,
            classroom_id=link.classroom_id,
            intended_role=link.intended_role,
            expires_at=link.expires_at,
            classroom=summary,
        )
