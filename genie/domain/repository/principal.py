"""Identity store interface."""

from abc import ABC, abstractmethod

from genie.domain.model.principal import Principal
from genie.domain.value import Claims, PrincipalId


class PrincipalRepository(ABC):
    """Authoritative store of principals and their claims."""

    @abstractmethod
    async def find_by_id(self, principal_id: PrincipalId) -> Principal | None:
        """Find a principal by id."""
        pass

    @abstractmethod
    async def save(self, principal: Principal) -> Principal:
        """Create or replace a principal."""
        pass

    @abstractmethod
    async def update_claims(self, principal_id: PrincipalId, claims: Claims) -> None:
        """Replace the claims bag of an existing principal.

        Raises:
            NotFoundError: If the principal does not exist
        """
        pass
