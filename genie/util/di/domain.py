"""Domain layer DI providers."""

from dishka import Scope, provide

from genie.config import AuthSettings, InvitationSettings
from genie.domain.repository import (
    ClassroomRepository,
    InvitationLinkRepository,
    PrincipalRepository,
    ProfileRepository,
    SchoolRepository,
)
from genie.domain.service import (
    AuthorizationService,
    IdentityService,
    InvitationService,
    ProfileService,
    SchoolService,
    SessionService,
)
from genie.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_authorization_service(self) -> AuthorizationService:
        """Provide the invitation authorization matrix."""
        return AuthorizationService()

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, principal_repository: PrincipalRepository
    ) -> IdentityService:
        """Provide identity store domain service."""
        return IdentityService(principal_repository=principal_repository)

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_school_service(
        self,
        school_repository: SchoolRepository,
        classroom_repository: ClassroomRepository,
    ) -> SchoolService:
        """Provide school domain service."""
        return SchoolService(
            school_repository=school_repository,
            classroom_repository=classroom_repository,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationLinkRepository,
        settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation ledger domain service."""
        return InvitationService(
            invitation_repository=invitation_repository, settings=settings
        )
