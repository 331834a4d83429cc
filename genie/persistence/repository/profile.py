"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from genie.domain.model import Profile
from genie.domain.repository import ProfileRepository
from genie.domain.value import PrincipalId
from genie.persistence.database import storage_errors
from genie.persistence.mappers import profile_to_dict, row_to_profile
from genie.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, profile_id: PrincipalId) -> Optional[Profile]:
        """Find a profile by its principal id."""
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        with storage_errors("profile.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def save(self, profile: Profile) -> Profile:
        """Upsert the profile keyed by principal id.

        ``created_at`` is never overwritten on conflict.
        """
        profile_dict = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**profile_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.id],
            set_={
                key: stmt.excluded[key]
                for key in profile_dict
                if key not in ("id", "created_at")
            },
        )
        with storage_errors("profile.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return profile
