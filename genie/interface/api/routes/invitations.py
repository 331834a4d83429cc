"""Invitation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from genie.application.usecase.invitation import (
    ConsumeInvitationUseCase,
    EnsureInvitationLinkUseCase,
    PreviewInvitationUseCase,
    RevokeInvitationUseCase,
)
from genie.application.usecase.invitation.consume_invitation import (
    ConsumeInvitationRequest,
    ConsumeInvitationResponse,
)
from genie.application.usecase.invitation.ensure_link import (
    EnsureInvitationLinkRequest,
    EnsureInvitationLinkResponse,
)
from genie.application.usecase.invitation.preview_invitation import (
    PreviewInvitationRequest,
    PreviewInvitationResponse,
)
from genie.application.usecase.invitation.revoke_invitation import (
    RevokeInvitationRequest,
    RevokeInvitationResponse,
)
from genie.domain.error import DomainError
from genie.domain.service import SessionService
from genie.domain.value import InvitableRole
from genie.interface.api.errors import missing_params, to_http_exception

router = APIRouter(
    prefix="/invitations", tags=["invitations"], route_class=DishkaRoute
)


class EnsureLinkAPIRequest(BaseModel):
    """API request for ensuring an invitation link."""

    classroom_id: UUID
    intended_role: InvitableRole


class PreviewAPIRequest(BaseModel):
    """API request for previewing an invitation."""

    token: str


class ConsumeAPIRequest(BaseModel):
    """API request for consuming an invitation."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    child_first_name: str | None = Field(default=None, alias="childFirstName")


class RevokeAPIRequest(BaseModel):
    """API request for revoking by token or by classroom and role."""

    token: str | None = None
    classroom_id: UUID | None = None
    intended_role: InvitableRole | None = None


@router.post("/links", response_model=EnsureInvitationLinkResponse)
async def ensure_invitation_link(
    request: EnsureLinkAPIRequest,
    use_case: FromDishka[EnsureInvitationLinkUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> EnsureInvitationLinkResponse:
    """Return the active link for a classroom and role, minting one if needed.

    Raises:
        HTTPException: 401 unauthenticated, 403 forbidden, 400 bad classroom
    """
    try:
        payload = session_service.authenticate(authorization)
        return await use_case.execute(
            EnsureInvitationLinkRequest(
                requester_id=payload.principal_id,
                classroom_id=request.classroom_id,
                intended_role=request.intended_role,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/preview", response_model=PreviewInvitationResponse)
async def preview_invitation(
    request: PreviewAPIRequest,
    use_case: FromDishka[PreviewInvitationUseCase],
) -> PreviewInvitationResponse:
    """Public preview of an invitation. No session required."""
    try:
        return await use_case.execute(PreviewInvitationRequest(token=request.token))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/preview", response_model=PreviewInvitationResponse)
async def preview_invitation_by_query(
    use_case: FromDishka[PreviewInvitationUseCase],
    token: str | None = Query(default=None),
) -> PreviewInvitationResponse:
    """Public preview of an invitation, token given as a query parameter."""
    if not token:
        missing_params("Missing token")
    try:
        return await use_case.execute(PreviewInvitationRequest(token=token))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/consume", response_model=ConsumeInvitationResponse)
async def consume_invitation(
    request: ConsumeAPIRequest,
    use_case: FromDishka[ConsumeInvitationUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> ConsumeInvitationResponse:
    """Promote the caller to the invitation's role and placement.

    The caller's current session token keeps its old claims; refresh the
    session afterwards.
    """
    try:
        payload = session_service.authenticate(authorization)
        return await use_case.execute(
            ConsumeInvitationRequest(
                principal_id=payload.principal_id,
                token=request.token,
                child_first_name=request.child_first_name,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/revoke", response_model=RevokeInvitationResponse)
async def revoke_invitation(
    request: RevokeAPIRequest,
    use_case: FromDishka[RevokeInvitationUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> RevokeInvitationResponse:
    """Expire one link, or every active link of a classroom and role."""
    try:
        payload = session_service.authenticate(authorization)
    except DomainError as e:
        raise to_http_exception(e) from e

    try:
        use_case_request = RevokeInvitationRequest(
            requester_id=payload.principal_id,
            token=request.token,
            classroom_id=request.classroom_id,
            intended_role=request.intended_role,
        )
    except ValidationError:
        missing_params("Provide token or classroom_id and intended_role")

    try:
        return await use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e) from e
