"""Application layer DI providers."""

from dishka import Scope, provide

from genie.application.usecase.auth import (
    GetCurrentSessionUseCase,
    RefreshSessionUseCase,
    SignUpUseCase,
)
from genie.application.usecase.invitation import (
    ConsumeInvitationUseCase,
    EnsureInvitationLinkUseCase,
    PreviewInvitationUseCase,
    RevokeInvitationUseCase,
)
from genie.application.usecase.onboarding import (
    CreateClassroomUseCase,
    DirectorOnboardingUseCase,
)
from genie.config import InvitationSettings
from genie.domain.repository import UnitOfWork
from genie.domain.service import (
    AuthorizationService,
    IdentityService,
    InvitationService,
    ProfileService,
    SchoolService,
    SessionService,
)
from genie.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_up_use_case(
        self,
        identity_service: IdentityService,
        session_service: SessionService,
        unit_of_work: UnitOfWork,
    ) -> SignUpUseCase:
        """Provide sign up use case."""
        return SignUpUseCase(
            identity_service=identity_service,
            session_service=session_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_session_use_case(
        self, identity_service: IdentityService, session_service: SessionService
    ) -> RefreshSessionUseCase:
        """Provide refresh session use case."""
        return RefreshSessionUseCase(
            identity_service=identity_service, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_current_session_use_case(
        self,
        session_service: SessionService,
        identity_service: IdentityService,
        profile_service: ProfileService,
    ) -> GetCurrentSessionUseCase:
        """Provide get current session use case."""
        return GetCurrentSessionUseCase(
            session_service=session_service,
            identity_service=identity_service,
            profile_service=profile_service,
        )

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_ensure_invitation_link_use_case(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        school_service: SchoolService,
        authorization_service: AuthorizationService,
        settings: InvitationSettings,
        unit_of_work: UnitOfWork,
    ) -> EnsureInvitationLinkUseCase:
        """Provide ensure invitation link use case."""
        return EnsureInvitationLinkUseCase(
            invitation_service=invitation_service,
            profile_service=profile_service,
            school_service=school_service,
            authorization_service=authorization_service,
            settings=settings,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_preview_invitation_use_case(
        self, invitation_service: InvitationService, school_service: SchoolService
    ) -> PreviewInvitationUseCase:
        """Provide preview invitation use case."""
        return PreviewInvitationUseCase(
            invitation_service=invitation_service, school_service=school_service
        )

    @provide(scope=Scope.REQUEST)
    def get_consume_invitation_use_case(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        identity_service: IdentityService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> ConsumeInvitationUseCase:
        """Provide consume invitation use case."""
        return ConsumeInvitationUseCase(
            invitation_service=invitation_service,
            profile_service=profile_service,
            identity_service=identity_service,
            school_service=school_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_revoke_invitation_use_case(
        self,
        invitation_service: InvitationService,
        profile_service: ProfileService,
        school_service: SchoolService,
        authorization_service: AuthorizationService,
        unit_of_work: UnitOfWork,
    ) -> RevokeInvitationUseCase:
        """Provide revoke invitation use case."""
        return RevokeInvitationUseCase(
            invitation_service=invitation_service,
            profile_service=profile_service,
            school_service=school_service,
            authorization_service=authorization_service,
            unit_of_work=unit_of_work,
        )

    # Onboarding use cases
    @provide(scope=Scope.REQUEST)
    def get_director_onboarding_use_case(
        self,
        identity_service: IdentityService,
        profile_service: ProfileService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> DirectorOnboardingUseCase:
        """Provide director onboarding use case."""
        return DirectorOnboardingUseCase(
            identity_service=identity_service,
            profile_service=profile_service,
            school_service=school_service,
            unit_of_work=unit_of_work,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_classroom_use_case(
        self,
        profile_service: ProfileService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> CreateClassroomUseCase:
        """Provide create classroom use case."""
        return CreateClassroomUseCase(
            profile_service=profile_service,
            school_service=school_service,
            unit_of_work=unit_of_work,
        )
