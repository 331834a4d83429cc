"""Refresh session use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import NotFoundError, UnauthenticatedError
from genie.domain.service import IdentityService, SessionService
from genie.domain.value import Claims, PrincipalId


class RefreshSessionRequest(BaseModel):
    """Refresh session request."""

    principal_id: str  # Principal ID from the presented session token


class RefreshSessionResponse(BaseModel):
    """Fresh session token and the claims it carries."""

    token: str
    claims: Claims


class RefreshSessionUseCase(BaseUseCase):
    """Use case re-minting a session from the identity store's current claims.

    This is how a caller picks up claims written after its token was issued,
    for example right after consuming an invitation.
    """

    def __init__(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> None:
        self.identity_service = identity_service
        self.session_service = session_service

    async def execute(self, request: RefreshSessionRequest) -> RefreshSessionResponse:
        """Execute session refresh.

        Raises:
            UnauthenticatedError: If the principal no longer exists
        """
        principal_id = PrincipalId(UUID(request.principal_id))
        with logfire.span("refresh_session", principal_id=str(principal_id)):
            try:
                principal = await self.identity_service.get_principal(principal_id)
            except NotFoundError as e:
                raise UnauthenticatedError("Unknown principal") from e

            token = self.session_service.issue(principal)
            return RefreshSessionResponse(token=token, claims=principal.claims)
