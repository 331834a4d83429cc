"""Sign up use case."""

import logfire
from pydantic import BaseModel, Field

from genie.application.usecase.base import BaseUseCase
from genie.domain.repository import UnitOfWork
from genie.domain.service import IdentityService, SessionService


class SignUpRequest(BaseModel):
    """Sign up request.

    Name fields land in the principal's signup metadata and later seed the
    profile's display name.
    """

    email: str = Field(min_length=3, max_length=320)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    full_name: str | None = Field(default=None, max_length=200)


class SignUpResponse(BaseModel):
    """Sign up response."""

    token: str
    principal_id: str


class SignUpUseCase(BaseUseCase):
    """Use case creating an unprovisioned principal and its first session."""

    def __init__(
        self,
        identity_service: IdentityService,
        session_service: SessionService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize sign up use case.

        Args:
            identity_service: Identity store service
            session_service: Session token service
            unit_of_work: Transaction boundary for the registration
        """
        self.identity_service = identity_service
        self.session_service = session_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: SignUpRequest) -> SignUpResponse:
        """Register the principal with empty claims and mint a session.

        Raises:
            StorageError: If the identity store write or commit fails
        """
        metadata = request.model_dump(
            include={"first_name", "last_name", "full_name"}, exclude_none=True
        )
        with logfire.span("sign_up"):
            async with self.unit_of_work.transaction():
                principal = await self.identity_service.register(
                    request.email.strip().lower(), metadata
                )
            token = self.session_service.issue(principal)
            return SignUpResponse(token=token, principal_id=str(principal.id))
