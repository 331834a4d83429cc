"""Director onboarding routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field

from genie.application.usecase.onboarding import (
    CreateClassroomUseCase,
    DirectorOnboardingUseCase,
)
from genie.application.usecase.onboarding.create_classroom import (
    CreateClassroomRequest,
    CreateClassroomResponse,
)
from genie.application.usecase.onboarding.director_onboarding import (
    DirectorOnboardingRequest,
    DirectorOnboardingResponse,
)
from genie.domain.error import DomainError
from genie.domain.service import SessionService
from genie.domain.value import Grade
from genie.interface.api.errors import to_http_exception

router = APIRouter(prefix="/onboarding", tags=["onboarding"], route_class=DishkaRoute)


class DirectorOnboardingAPIRequest(BaseModel):
    """API request for director onboarding."""

    school_name: str = Field(min_length=1, max_length=200)
    full_name: str | None = Field(default=None, max_length=200)


class CreateClassroomAPIRequest(BaseModel):
    """API request for creating a classroom."""

    name: str = Field(min_length=1, max_length=200)
    grade: Grade


@router.post("/director", response_model=DirectorOnboardingResponse)
async def onboard_director(
    request: DirectorOnboardingAPIRequest,
    use_case: FromDishka[DirectorOnboardingUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> DirectorOnboardingResponse:
    """Make the caller a director, creating their school if needed."""
    try:
        payload = session_service.authenticate(authorization)
        return await use_case.execute(
            DirectorOnboardingRequest(
                principal_id=payload.principal_id,
                school_name=request.school_name,
                full_name=request.full_name,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post(
    "/classrooms",
    response_model=CreateClassroomResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_classroom(
    request: CreateClassroomAPIRequest,
    use_case: FromDishka[CreateClassroomUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> CreateClassroomResponse:
    """Add a classroom to the director's school."""
    try:
        payload = session_service.authenticate(authorization)
        return await use_case.execute(
            CreateClassroomRequest(
                requester_id=payload.principal_id,
                name=request.name,
                grade=request.grade,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
