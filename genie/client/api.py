"""HTTP client for the Genie API.

Failures come back as the same domain errors the server raised, rebuilt
from the ``code`` of the error body, so callers branch on exception type
rather than on status codes.
"""

from typing import Any
from uuid import UUID

import httpx
import logfire

from genie.application.usecase.auth.get_current_session import (
    GetCurrentSessionResponse,
)
from genie.application.usecase.auth.refresh_session import RefreshSessionResponse
from genie.application.usecase.auth.sign_up import SignUpResponse
from genie.application.usecase.invitation.consume_invitation import (
    ConsumeInvitationResponse,
)
from genie.application.usecase.invitation.ensure_link import (
    EnsureInvitationLinkResponse,
)
from genie.application.usecase.invitation.preview_invitation import (
    PreviewInvitationResponse,
)
from genie.application.usecase.invitation.revoke_invitation import (
    RevokeInvitationResponse,
)
from genie.application.usecase.onboarding.create_classroom import (
    CreateClassroomResponse,
)
from genie.application.usecase.onboarding.director_onboarding import (
    DirectorOnboardingResponse,
)
from genie.config import ClientSettings
from genie.domain.error import ERRORS_BY_CODE
from genie.domain.value import Grade, InvitableRole


class GenieAPIError(Exception):
    """Transport failure or an error response with no domain error code."""

    def __init__(
        self, message: str, status_code: int | None = None, code: str | None = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def error_from_response(response: httpx.Response) -> Exception:
    """Rebuild the error carried by a non-2xx response."""
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None

    if isinstance(detail, dict):
        code = detail.get("code")
        message = str(detail.get("message") or "")
        error_cls = ERRORS_BY_CODE.get(code or "")
        if error_cls is not None:
            return error_cls.from_message(message)
        return GenieAPIError(message, status_code=response.status_code, code=code)

    return GenieAPIError(
        f"Unexpected response: {response.status_code}",
        status_code=response.status_code,
    )


class GenieClient:
    """Async client for the invitation, onboarding and session endpoints."""

    def __init__(
        self, settings: ClientSettings, http: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the client.

        Args:
            settings: Client settings (base URL, timeout)
            http: Preconfigured httpx client; one is created when omitted
        """
        self.settings = settings
        self._http = http or httpx.AsyncClient(
            base_url=settings.base_url, timeout=settings.timeout_seconds
        )

    async def __aenter__(self) -> "GenieClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        session_token: str | None = None,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {session_token}"} if session_token else {}
        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            logfire.error("Genie API transport error", path=path, error=str(e))
            raise GenieAPIError(f"HTTP error calling {path}: {e}") from e

        if response.is_success:
            return response.json()

        error = error_from_response(response)
        logfire.warn(
            "Genie API call failed",
            path=path,
            status_code=response.status_code,
            code=getattr(error, "code", None),
        )
        raise error

    # Session

    async def sign_up(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        full_name: str | None = None,
    ) -> SignUpResponse:
        data = await self._request(
            "POST",
            "/auth/signup",
            json={
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "full_name": full_name,
            },
        )
        return SignUpResponse.model_validate(data)

    async def refresh_session(self, session_token: str) -> RefreshSessionResponse:
        data = await self._request("POST", "/auth/session/refresh", session_token)
        return RefreshSessionResponse.model_validate(data)

    async def get_current_session(
        self, session_token: str
    ) -> GetCurrentSessionResponse:
        data = await self._request("GET", "/auth/me", session_token)
        return GetCurrentSessionResponse.model_validate(data)

    # Onboarding

    async def onboard_director(
        self, session_token: str, school_name: str, full_name: str | None = None
    ) -> DirectorOnboardingResponse:
        data = await self._request(
            "POST",
            "/onboarding/director",
            session_token,
            json={"school_name": school_name, "full_name": full_name},
        )
        return DirectorOnboardingResponse.model_validate(data)

    async def create_classroom(
        self, session_token: str, name: str, grade: Grade
    ) -> CreateClassroomResponse:
        data = await self._request(
            "POST",
            "/onboarding/classrooms",
            session_token,
            json={"name": name, "grade": grade.value},
        )
        return CreateClassroomResponse.model_validate(data)

    # Invitations

    async def ensure_invitation_link(
        self, session_token: str, classroom_id: UUID, intended_role: InvitableRole
    ) -> EnsureInvitationLinkResponse:
        data = await self._request(
            "POST",
            "/invitations/links",
            session_token,
            json={
                "classroom_id": str(classroom_id),
                "intended_role": intended_role.value,
            },
        )
        return EnsureInvitationLinkResponse.model_validate(data)

    async def preview_invitation(self, invite_token: str) -> PreviewInvitationResponse:
        data = await self._request(
            "POST", "/invitations/preview", json={"token": invite_token}
        )
        return PreviewInvitationResponse.model_validate(data)

    async def consume_invitation(
        self,
        session_token: str,
        invite_token: str,
        child_first_name: str | None = None,
    ) -> ConsumeInvitationResponse:
        body: dict[str, Any] = {"token": invite_token}
        if child_first_name:
            body["childFirstName"] = child_first_name
        data = await self._request(
            "POST", "/invitations/consume", session_token, json=body
        )
        return ConsumeInvitationResponse.model_validate(data)

    async def revoke_invitation(
        self,
        session_token: str,
        invite_token: str | None = None,
        classroom_id: UUID | None = None,
        intended_role: InvitableRole | None = None,
    ) -> RevokeInvitationResponse:
        """Revoke by token, or by classroom and intended role."""
        body: dict[str, Any] = {}
        if invite_token:
            body["token"] = invite_token
        if classroom_id is not None:
            body["classroom_id"] = str(classroom_id)
        if intended_role is not None:
            body["intended_role"] = intended_role.value
        data = await self._request(
            "POST", "/invitations/revoke", session_token, json=body
        )
        return RevokeInvitationResponse.model_validate(data)
