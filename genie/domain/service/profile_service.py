"""Profile domain service."""

import logfire

from genie.domain.model import Principal, Profile
from genie.domain.repository import ProfileRepository
from genie.domain.value import ClassroomId, PrincipalId, Role, SchoolId

from .base import Service


class ProfileService(Service):
    """Domain service for profile provisioning."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
        """
        self.profile_repository = profile_repository

    async def get_profile(self, principal_id: PrincipalId) -> Profile | None:
        """Get a principal's profile, if provisioned."""
        return await self.profile_repository.find_by_id(principal_id)

    async def promote(
        self,
        principal: Principal,
        role: Role,
        school_id: SchoolId | None,
        classroom_id: ClassroomId | None,
        child_first_name: str | None = None,
    ) -> Profile:
        """Create or re-scope the profile of a principal.

        A missing profile is created with the display name merged from the
        principal's signup metadata. An existing one keeps its name and
        creation time and only has role and placement replaced. A child
        name is only kept on PARENT profiles.

        Args:
            principal: The principal being promoted
            role: New role
            school_id: New school
            classroom_id: New classroom
            child_first_name: Child's first name (parents only)

        Returns:
            The saved profile
        """
        with logfire.span(
            "profile_service.promote",
            principal_id=str(principal.id),
            role=role.value,
        ):
            child_first_name = (child_first_name or "").strip() or None
            if role != Role.PARENT:
                child_first_name = None

            existing = await self.profile_repository.find_by_id(principal.id)
            if existing is None:
                profile = Profile(
                    id=principal.id,
                    role=role,
                    email=principal.email,
                    full_name=principal.display_name,
                    school_id=school_id,
                    classroom_id=classroom_id,
                    child_first_name=child_first_name,
                )
                logfire.info("Creating profile", principal_id=str(principal.id))
            else:
                update: dict = {
                    "role": role,
                    "school_id": school_id,
                    "classroom_id": classroom_id,
                }
                if role != Role.PARENT:
                    update["child_first_name"] = None
                elif child_first_name:
                    update["child_first_name"] = child_first_name
                profile = existing.model_copy(update=update)
                logfire.info(
                    "Re-scoping existing profile",
                    principal_id=str(principal.id),
                    previous_role=existing.role.value,
                )

            return await self.profile_repository.save(profile)

    async def save(self, profile: Profile) -> Profile:
        """Persist profile edits that keep role and placement unchanged."""
        return await self.profile_repository.save(profile)
