"""Session routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status

from genie.application.usecase.auth import (
    GetCurrentSessionUseCase,
    RefreshSessionUseCase,
    SignUpUseCase,
)
from genie.application.usecase.auth.get_current_session import (
    GetCurrentSessionRequest,
    GetCurrentSessionResponse,
)
from genie.application.usecase.auth.refresh_session import (
    RefreshSessionRequest,
    RefreshSessionResponse,
)
from genie.application.usecase.auth.sign_up import SignUpRequest, SignUpResponse
from genie.domain.error import DomainError, UnauthenticatedError
from genie.domain.service import SessionService
from genie.interface.api.errors import to_http_exception

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


@router.post(
    "/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED
)
async def sign_up(
    request: SignUpRequest,
    use_case: FromDishka[SignUpUseCase],
) -> SignUpResponse:
    """Create an unprovisioned principal and return its first session token."""
    try:
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/session/refresh", response_model=RefreshSessionResponse)
async def refresh_session(
    use_case: FromDishka[RefreshSessionUseCase],
    session_service: FromDishka[SessionService],
    authorization: str | None = Header(default=None),
) -> RefreshSessionResponse:
    """Mint a new session token carrying the principal's current claims."""
    try:
        payload = session_service.authenticate(authorization)
        return await use_case.execute(
            RefreshSessionRequest(principal_id=payload.principal_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/me", response_model=GetCurrentSessionResponse)
async def get_current_session(
    use_case: FromDishka[GetCurrentSessionUseCase],
    authorization: str | None = Header(default=None),
) -> GetCurrentSessionResponse:
    """Describe the caller's session, flagging stale token claims."""
    try:
        scheme, _, token = (authorization or "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthenticatedError()
        return await use_case.execute(GetCurrentSessionRequest(token=token.strip()))
    except DomainError as e:
        raise to_http_exception(e) from e
