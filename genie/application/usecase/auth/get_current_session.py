"""Get current session use case."""

from uuid import UUID

from pydantic import BaseModel

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import NotFoundError, UnauthenticatedError
from genie.domain.model import Profile
from genie.domain.service import IdentityService, ProfileService, SessionService
from genie.domain.value import Claims, PrincipalId


class GetCurrentSessionRequest(BaseModel):
    """Get current session request."""

    token: str  # Session JWT


class GetCurrentSessionResponse(BaseModel):
    """Get current session response."""

    principal_id: str
    email: str | None
    claims: Claims  # From the identity store
    token_claims: Claims  # Embedded in the presented token
    stale: bool  # True when the token lags behind the store
    profile: Profile | None


class GetCurrentSessionUseCase(BaseUseCase):
    """Use case describing the caller's session and whether it is stale."""

    def __init__(
        self,
        session_service: SessionService,
        identity_service: IdentityService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get current session use case.

        Args:
            session_service: Session token service
            identity_service: Identity store service
            profile_service: Profile service
        """
        self.session_service = session_service
        self.identity_service = identity_service
        self.profile_service = profile_service

    async def execute(
        self, request: GetCurrentSessionRequest
    ) -> GetCurrentSessionResponse:
        """Execute get current session flow.

        Steps:
        1. Verify the session token
        2. Load the principal's stored claims
        3. Compare them with the claims embedded in the token
        4. Attach the profile, if provisioned

        Raises:
            UnauthenticatedError: If the token is invalid or the principal unknown
        """
        payload = self.session_service.authenticate(f"Bearer {request.token}")
        principal_id = PrincipalId(UUID(payload.principal_id))

        try:
            principal = await self.identity_service.get_principal(principal_id)
        except NotFoundError as e:
            raise UnauthenticatedError("Unknown principal") from e

        token_claims = payload.claims()
        profile = await self.profile_service.get_profile(principal_id)

        return GetCurrentSessionResponse(
            principal_id=str(principal.id),
            email=principal.email,
            claims=principal.claims,
            token_claims=token_claims,
            stale=not token_claims.matches(principal.claims),
            profile=profile,
        )
