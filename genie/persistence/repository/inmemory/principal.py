"""In-memory identity store for testing."""

from typing import Optional

from genie.domain.error import NotFoundError
from genie.domain.model.principal import Principal
from genie.domain.repository.principal import PrincipalRepository
from genie.domain.value import Claims, PrincipalId


class InMemoryPrincipalRepository(PrincipalRepository):
    """In-memory implementation of PrincipalRepository for testing."""

    def __init__(self) -> None:
        self._principals: dict[PrincipalId, Principal] = {}

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Principal]:
        return self._principals.get(principal_id)

    async def save(self, principal: Principal) -> Principal:
        self._principals[principal.id] = principal
        return principal

    async def update_claims(self, principal_id: PrincipalId, claims: Claims) -> None:
        """Replace the claims bag of an existing principal."""
        principal = self._principals.get(principal_id)
        if principal is None:
            raise NotFoundError("Principal", str(principal_id))
        self._principals[principal_id] = principal.model_copy(
            update={"claims": claims}
        )
