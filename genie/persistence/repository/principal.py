"""PostgreSQL implementation of the identity store."""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from genie.domain.error import NotFoundError
from genie.domain.model import Principal
from genie.domain.repository import PrincipalRepository
from genie.domain.value import Claims, PrincipalId
from genie.persistence.database import storage_errors
from genie.persistence.mappers import (
    claims_to_json,
    principal_to_dict,
    row_to_principal,
)
from genie.persistence.tables import principals_table


class PostgresPrincipalRepository(PrincipalRepository):
    """PostgreSQL implementation of PrincipalRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, principal_id: PrincipalId) -> Optional[Principal]:
        """Find a principal by id."""
        stmt = select(principals_table).where(principals_table.c.id == principal_id)
        with storage_errors("principal.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_principal(dict(row)) if row else None

    async def save(self, principal: Principal) -> Principal:
        """Create or replace a principal."""
        principal_dict = principal_to_dict(principal)
        stmt = insert(principals_table).values(**principal_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[principals_table.c.id],
            set_={
                "email": stmt.excluded.email,
                "user_metadata": stmt.excluded.user_metadata,
                "claims": stmt.excluded.claims,
            },
        )
        with storage_errors("principal.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return principal

    async def update_claims(self, principal_id: PrincipalId, claims: Claims) -> None:
        """Replace the claims bag of an existing principal.

        Raises:
            NotFoundError: If the principal does not exist
        """
        stmt = (
            update(principals_table)
            .where(principals_table.c.id == principal_id)
            .values(claims=claims_to_json(claims))
        )
        with storage_errors("principal.update_claims"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        if not result.rowcount:
            raise NotFoundError("Principal", str(principal_id))
