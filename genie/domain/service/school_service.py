"""School and classroom domain service."""

from uuid import uuid4

import logfire

from genie.domain.error import NotFoundError
from genie.domain.model import Classroom, School
from genie.domain.repository import ClassroomRepository, SchoolRepository
from genie.domain.value import ClassroomId, Grade, SchoolId

from .base import Service


class SchoolService(Service):
    """Domain service for schools and classrooms."""

    def __init__(
        self,
        school_repository: SchoolRepository,
        classroom_repository: ClassroomRepository,
    ) -> None:
        self.school_repository = school_repository
        self.classroom_repository = classroom_repository

    async def get_classroom(self, classroom_id: ClassroomId) -> Classroom:
        """Get a classroom by ID.

        Raises:
            NotFoundError: If the classroom does not exist
        """
        classroom = await self.classroom_repository.find_by_id(classroom_id)
        if classroom is None:
            logfire.warn("Classroom not found", classroom_id=str(classroom_id))
            raise NotFoundError("Classroom", str(classroom_id))
        return classroom

    async def find_classroom(self, classroom_id: ClassroomId) -> Classroom | None:
        return await self.classroom_repository.find_by_id(classroom_id)

    async def create_school(self, name: str) -> School:
        with logfire.span("school_service.create_school", name=name):
            school = await self.school_repository.save(
                School(id=SchoolId(uuid4()), name=name)
            )
            logfire.info("School created", school_id=str(school.id))
            return school

    async def create_classroom(
        self, school_id: SchoolId, name: str, grade: Grade
    ) -> Classroom:
        with logfire.span(
            "school_service.create_classroom", school_id=str(school_id), name=name
        ):
            classroom = await self.classroom_repository.save(
                Classroom(
                    id=ClassroomId(uuid4()), school_id=school_id, name=name, grade=grade
                )
            )
            logfire.info(
                "Classroom created",
                classroom_id=str(classroom.id),
                school_id=str(school_id),
            )
            return classroom
