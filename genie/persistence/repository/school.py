"""PostgreSQL implementations of School and Classroom repositories."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from genie.domain.model import Classroom, School
from genie.domain.repository import ClassroomRepository, SchoolRepository
from genie.domain.value import ClassroomId, SchoolId
from genie.persistence.database import storage_errors
from genie.persistence.mappers import (
    classroom_to_dict,
    row_to_classroom,
    row_to_school,
    school_to_dict,
)
from genie.persistence.tables import classrooms_table, schools_table


class PostgresSchoolRepository(SchoolRepository):
    """PostgreSQL implementation of SchoolRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, school_id: SchoolId) -> Optional[School]:
        stmt = select(schools_table).where(schools_table.c.id == school_id)
        with storage_errors("school.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_school(dict(row)) if row else None

    async def save(self, school: School) -> School:
        stmt = insert(schools_table).values(**school_to_dict(school))
        stmt = stmt.on_conflict_do_update(
            index_elements=[schools_table.c.id], set_={"name": stmt.excluded.name}
        )
        with storage_errors("school.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return school


class PostgresClassroomRepository(ClassroomRepository):
    """PostgreSQL implementation of ClassroomRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, classroom_id: ClassroomId) -> Optional[Classroom]:
        stmt = select(classrooms_table).where(classrooms_table.c.id == classroom_id)
        with storage_errors("classroom.find_by_id"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_classroom(dict(row)) if row else None

    async def save(self, classroom: Classroom) -> Classroom:
        stmt = insert(classrooms_table).values(**classroom_to_dict(classroom))
        stmt = stmt.on_conflict_do_update(
            index_elements=[classrooms_table.c.id],
            set_={"name": stmt.excluded.name, "grade": stmt.excluded.grade},
        )
        with storage_errors("classroom.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return classroom
