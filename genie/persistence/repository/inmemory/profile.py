"""In-memory profile repository for testing."""

from typing import Optional

from genie.domain.model.profile import Profile
from genie.domain.repository.profile import ProfileRepository
from genie.domain.value import PrincipalId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[PrincipalId, Profile] = {}

    async def find_by_id(self, profile_id: PrincipalId) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    async def save(self, profile: Profile) -> Profile:
        """Insert or update; the first created_at wins."""
        existing = self._profiles.get(profile.id)
        if existing is not None:
            profile = profile.model_copy(update={"created_at": existing.created_at})
        self._profiles[profile.id] = profile
        return profile
