"""Create classroom use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from genie.application.usecase.base import BaseUseCase
from genie.domain.error import ForbiddenError
from genie.domain.repository import UnitOfWork
from genie.domain.service import ProfileService, SchoolService
from genie.domain.value import Grade, PrincipalId, Role


class CreateClassroomRequest(BaseModel):
    """Create classroom request."""

    requester_id: str  # Principal ID from session token
    name: str = Field(min_length=1, max_length=200)
    grade: Grade


class CreateClassroomResponse(BaseModel):
    """Create classroom response."""

    id: UUID
    school_id: UUID
    name: str
    grade: Grade


class CreateClassroomUseCase(BaseUseCase):
    """Use case for a director adding a classroom to their school."""

    def __init__(
        self,
        profile_service: ProfileService,
        school_service: SchoolService,
        unit_of_work: UnitOfWork,
    ) -> None:
        self.profile_service = profile_service
        self.school_service = school_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateClassroomRequest) -> CreateClassroomResponse:
        """Create the classroom in the requester's school.

        Raises:
            ForbiddenError: Requester is not a director with a school
            StorageError: The write or the commit failed
        """
        requester_id = PrincipalId(UUID(request.requester_id))
        profile = await self.profile_service.get_profile(requester_id)
        is_director = profile is not None and profile.role == Role.DIRECTOR
        if not is_director or profile.school_id is None:
            raise ForbiddenError("Only directors can create classrooms")

        async with self.unit_of_work.transaction():
            classroom = await self.school_service.create_classroom(
                profile.school_id, request.name.strip(), request.grade
            )
        logfire.info(
            "Classroom added by director",
            requester_id=str(requester_id),
            classroom_id=str(classroom.id),
        )
        return CreateClassroomResponse(
            id=classroom.id,
            school_id=classroom.school_id,
            name=classroom.name,
            grade=classroom.grade,
        )
