"""Profile repository interface."""

from abc import ABC, abstractmethod

from genie.domain.model.profile import Profile
from genie.domain.value import PrincipalId


class ProfileRepository(ABC):
    """Repository for Profile entity (one row per principal)."""

    @abstractmethod
    async def find_by_id(self, profile_id: PrincipalId) -> Profile | None:
        """Find a profile by its principal id."""
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Insert the profile if absent, update it otherwise."""
        pass
