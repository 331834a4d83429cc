"""Director onboarding use case."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import ForbiddenError, NotFoundError, UnauthenticatedError
from genie.domain.repository import UnitOfWork
from genie.domain.service import IdentityService, ProfileService, SchoolService
from genie.domain.value import PrincipalId, Role


class DirectorOnboardingRequest(BaseModel):
    """Director onboarding request."""

    principal_id: str  # Principal ID from session token
    school_name: str = Field(min_length=1, max_length=200)
    full_name: str | None = Field(default=None, max_length=200)


class DirectorOnboardingResponse(BaseModel):
    """Director onboarding response."""

    ok: Literal[True] = True
    role: Role = Role.DIRECTOR
    school_id: UUID
    created_school: bool


class DirectorOnboardingUseCase(BaseUseCase):
    """Use case bootstrapping a director and their school.

    Only principals without a profile, or directors re-running onboarding,
    may go through it; anyone else already holds a role granted by an
    invitation.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        profile_service: ProfileService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize use case.

        Args:
            identity_service: Identity store service (claims)
            profile_service: Profile service
            school_service: School service
            unit_of_work: Transaction boundary for the onboarding writes
        """
        self.identity_service = identity_service
        self.profile_service = profile_service
        self.school_service = school_service
        self.unit_of_work = unit_of_work

    async def execute(
        self, request: DirectorOnboardingRequest
    ) -> DirectorOnboardingResponse:
        """Execute director onboarding.

        Steps:
        1. Load the principal and its profile
        2. Reuse the director's school or create one
        3. Write the DIRECTOR profile
        4. Write matching claims
        5. Commit school, profile and claims together

        Raises:
            UnauthenticatedError: Session names an unknown principal
            ForbiddenError: Caller already holds a non-director role
            StorageError: A write or the commit failed
        """
        principal_id = PrincipalId(UUID(request.principal_id))

        with logfire.span("director_onboarding", principal_id=str(principal_id)):
            try:
                principal = await self.identity_service.get_principal(principal_id)
            except NotFoundError as e:
                raise UnauthenticatedError("Unknown principal") from e

            existing = await self.profile_service.get_profile(principal_id)
            if existing is not None and existing.role != Role.DIRECTOR:
                logfire.warn(
                    "Onboarding refused for provisioned principal",
                    principal_id=str(principal_id),
                    role=existing.role.value,
                )
                raise ForbiddenError("Profile already provisioned")

            created_school = False
            async with self.unit_of_work.transaction():
                if existing is not None and existing.school_id is not None:
                    school_id = existing.school_id
                else:
                    school = await self.school_service.create_school(
                        request.school_name.strip()
                    )
                    school_id = school.id
                    created_school = True

                profile = await self.profile_service.promote(
                    principal,
                    role=Role.DIRECTOR,
                    school_id=school_id,
                    classroom_id=None,
                )
                full_name = (request.full_name or "").strip()
                if full_name and full_name != profile.full_name:
                    profile = await self.profile_service.save(
                        profile.model_copy(update={"full_name": full_name})
                    )

                await self.identity_service.update_claims(
                    principal.id, profile.to_claims()
                )

            logfire.info(
                "Director onboarded",
                principal_id=str(principal_id),
                school_id=str(school_id),
                created_school=created_school,
            )
            return DirectorOnboardingResponse(
                school_id=school_id, created_school=created_school
            )
