"""Caller-side session controller.

Consuming an invitation writes new claims to the identity store, but the
session token the caller already holds keeps its old claims until it is
refreshed. The controller owns that refresh and tells the rest of the app
when automatic profile reloads are safe.

States:

    IDLE  --begin_provisioning-->  PROVISIONING  --finish_provisioning-->  READY
      ^                                 |
      +------------ failure ------------+

READY is reached only once the session token carries a role.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable

import logfire

from genie.application.usecase.invitation.consume_invitation import (
    ConsumeInvitationResponse,
)
from genie.application.usecase.invitation.preview_invitation import (
    PreviewInvitationResponse,
)
from genie.client.api import GenieClient
from genie.config import ClientSettings
from genie.domain.error import InvalidInvitationError, UnauthenticatedError
from genie.domain.value import Claims, ClassroomId, SchoolId
from genie.util.links import extract_invite_token


class SessionState(str, Enum):
    IDLE = "idle"
    PROVISIONING = "provisioning"
    READY = "ready"


class ClaimsPropagationTimeout(Exception):
    """Refreshed sessions kept carrying stale claims for the whole retry budget."""

    def __init__(self, expected: Claims, actual: Claims, attempts: int):
        self.expected = expected
        self.actual = actual
        self.attempts = attempts
        super().__init__(
            f"Claims not propagated after {attempts} attempts "
            f"(expected role={expected.role}, got role={actual.role})"
        )


class SessionController:
    """Holds the caller's session and drives invitation acceptance."""

    def __init__(
        self,
        client: GenieClient,
        settings: ClientSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the controller.

        Args:
            client: API client
            settings: Client settings (refresh retry budget)
            sleep: Awaitable sleep, replaceable in tests
        """
        self.client = client
        self.settings = settings
        self._sleep = sleep
        self.token: str | None = None
        self.claims = Claims()
        self.state = SessionState.IDLE

    @property
    def profile_refresh_allowed(self) -> bool:
        """Whether automatic profile reloads may run now."""
        return self.state != SessionState.PROVISIONING

    def _require_token(self) -> str:
        if not self.token:
            raise UnauthenticatedError("No session")
        return self.token

    def _settle(self) -> None:
        self.state = SessionState.READY if self.claims.role else SessionState.IDLE

    async def sign_up(
        self,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> None:
        """Create a principal and adopt its (unprovisioned) session."""
        response = await self.client.sign_up(email, first_name, last_name)
        self.token = response.token
        self.claims = Claims()
        self._settle()

    def begin_provisioning(self) -> None:
        """Enter PROVISIONING; automatic profile reloads pause until finish."""
        if self.state == SessionState.PROVISIONING:
            raise RuntimeError("Provisioning already in progress")
        self.state = SessionState.PROVISIONING
        logfire.info("Session provisioning started")

    def finish_provisioning(self) -> None:
        """Leave PROVISIONING for READY or, without a role, IDLE."""
        self._settle()
        logfire.info("Session provisioning finished", state=self.state.value)

    async def preview(self, token_or_url: str) -> PreviewInvitationResponse:
        """Preview an invitation from a bare token or a deep link."""
        return await self.client.preview_invitation(self._invite_token(token_or_url))

    async def accept_invitation(
        self, token_or_url: str, child_first_name: str | None = None
    ) -> ConsumeInvitationResponse:
        """Consume an invitation and wait until the session carries its claims.

        Raises:
            DomainError: Any failure kind the server reports
            ClaimsPropagationTimeout: Claims did not show up in time
        """
        session_token = self._require_token()
        invite_token = self._invite_token(token_or_url)

        self.begin_provisioning()
        try:
            result = await self.client.consume_invitation(
                session_token, invite_token, child_first_name
            )
            await self.refresh_claims(
                Claims(
                    role=result.role,
                    school_id=SchoolId(result.school_id),
                    classroom_id=ClassroomId(result.classroom_id),
                )
            )
        finally:
            self.finish_provisioning()
        return result

    async def refresh_claims(self, expected: Claims | None = None) -> Claims:
        """Refresh the session until its claims match ``expected``.

        With no expectation a single refresh is made.

        Raises:
            ClaimsPropagationTimeout: Budget exhausted with stale claims
        """
        attempts = max(1, self.settings.claims_refresh_max_attempts)
        for attempt in range(1, attempts + 1):
            response = await self.client.refresh_session(self._require_token())
            self.token = response.token
            self.claims = response.claims

            if expected is None or self.claims.matches(expected):
                logfire.info("Session claims refreshed", attempt=attempt)
                return self.claims

            logfire.info("Session claims still stale", attempt=attempt)
            if attempt < attempts:
                await self._sleep(self.settings.claims_refresh_interval_seconds)

        raise ClaimsPropagationTimeout(expected, self.claims, attempts)

    @staticmethod
    def _invite_token(token_or_url: str) -> str:
        value = token_or_url.strip()
        if "://" in value:
            token = extract_invite_token(value)
            if token is None:
                raise InvalidInvitationError("Link carries no invitation token")
            return token
        return value
