"""In-memory school and classroom repositories for testing."""

from typing import Optional

from genie.domain.model.school import Classroom, School
from genie.domain.repository.school import ClassroomRepository, SchoolRepository
from genie.domain.value import ClassroomId, SchoolId


class InMemorySchoolRepository(SchoolRepository):
    """In-memory implementation of SchoolRepository for testing."""

    def __init__(self) -> None:
        self._schools: dict[SchoolId, School] = {}

    async def find_by_id(self, school_id: SchoolId) -> Optional[School]:
        return self._schools.get(school_id)

    async def save(self, school: School) -> School:
        self._schools[school.id] = school
        return school


class InMemoryClassroomRepository(ClassroomRepository):
    """In-memory implementation of ClassroomRepository for testing."""

    def __init__(self) -> None:
        self._classrooms: dict[ClassroomId, Classroom] = {}

    async def find_by_id(self, classroom_id: ClassroomId) -> Optional[Classroom]:
        return self._classrooms.get(classroom_id)

    async def save(self, classroom: Classroom) -> Classroom:
        self._classrooms[classroom.id] = classroom
        return classroom
