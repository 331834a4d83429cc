"""Identity store domain service."""

from typing import Any
from uuid import uuid4

import logfire

from genie.domain.error import NotFoundError
from genie.domain.model import Principal
from genie.domain.repository import PrincipalRepository
from genie.domain.value import Claims, PrincipalId

from .base import Service


class IdentityService(Service):
    """Domain service over the identity store (principals and claims)."""

    def __init__(self, principal_repository: PrincipalRepository) -> None:
        """Initialize identity service.

        Args:
            principal_repository: Principal repository
        """
        self.principal_repository = principal_repository

    async def register(
        self, email: str | None, user_metadata: dict[str, Any] | None = None
    ) -> Principal:
        """Create an unprovisioned principal with an empty claims bag."""
        with logfire.span("identity_service.register"):
            principal = Principal(
                id=PrincipalId(uuid4()),
                email=email,
                user_metadata=user_metadata or {},
            )
            saved = await self.principal_repository.save(principal)
            logfire.info("Principal registered", principal_id=str(saved.id))
            return saved

    async def get_principal(self, principal_id: PrincipalId) -> Principal:
        """Get a principal by ID.

        Raises:
            NotFoundError: If the principal does not exist
        """
        principal = await self.principal_repository.find_by_id(principal_id)
        if principal is None:
            raise NotFoundError("Principal", str(principal_id))
        return principal

    async def update_claims(self, principal_id: PrincipalId, claims: Claims) -> None:
        """Replace a principal's claims bag.

        New claims are visible to the next session refresh, not to tokens
        already handed out.
        """
        with logfire.span(
            "identity_service.update_claims",
            principal_id=str(principal_id),
            role=claims.role.value if claims.role else None,
        ):
            await self.principal_repository.update_claims(principal_id, claims)
            logfire.info("Principal claims updated", principal_id=str(principal_id))
