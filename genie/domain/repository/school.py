"""School and classroom repository interfaces."""

from abc import ABC, abstractmethod

from genie.domain.model.school import Classroom, School
from genie.domain.value import ClassroomId, SchoolId


class SchoolRepository(ABC):
    """Repository for School entity."""

    @abstractmethod
    async def find_by_id(self, school_id: SchoolId) -> School | None:
        pass

    @abstractmethod
    async def save(self, school: School) -> School:
        pass


class ClassroomRepository(ABC):
    """Repository for Classroom entity."""

    @abstractmethod
    async def find_by_id(self, classroom_id: ClassroomId) -> Classroom | None:
        pass

    @abstractmethod
    async def save(self, classroom: Classroom) -> Classroom:
        pass
