"""Session token domain service."""

import logfire

from genie.config import AuthSettings
from genie.domain.error import UnauthenticatedError
from genie.domain.model import Principal
from genie.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class SessionService(Service):
    """Domain service minting and verifying session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def issue(self, principal: Principal) -> str:
        """Mint a session token carrying the principal's current claims."""
        with logfire.span("session_service.issue", principal_id=str(principal.id)):
            token = create_token(
                str(principal.id), principal.email, principal.claims, self.auth_settings
            )
            logfire.info("Session token issued", principal_id=str(principal.id))
            return token

    def verify(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("session_service.verify"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token verification failed", error=str(e))
                raise

    def authenticate(self, authorization: str | None) -> TokenPayload:
        """Authenticate an ``Authorization: Bearer <token>`` header value.

        Raises:
            UnauthenticatedError: Header missing, malformed, or token invalid
        """
        if not authorization:
            raise UnauthenticatedError()

        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthenticatedError("Expected a Bearer token")

        try:
            return self.verify(token.strip())
        except JWTError as e:
            raise UnauthenticatedError(str(e)) from e
