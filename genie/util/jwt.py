"""Session token utilities."""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel

from genie.config import AuthSettings
from genie.domain.value import Claims


class TokenPayload(BaseModel):
    """Session token payload.

    The claims are a snapshot taken when the token was minted; they go
    stale when the identity store's claims change until the session is
    refreshed.
    """

    sub: str
    email: str | None = None
    role: str | None = None
    school_id: str | None = None
    classroom_id: str | None = None
    iat: datetime
    exp: datetime

    @property
    def principal_id(self) -> str:
        return self.sub

    def claims(self) -> Claims:
        """Claims embedded in the token."""
        return Claims(
            role=self.role,
            school_id=self.school_id,
            classroom_id=self.classroom_id,
        )


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    principal_id: str, email: str | None, claims: Claims, settings: AuthSettings
) -> str:
    """Create a session token.

    Args:
        principal_id: Principal ID (becomes ``sub``)
        email: Principal email
        claims: Claims bag to embed
        settings: Authentication settings

    Returns:
        Encoded JWT
    """
    issued_at = datetime.now(UTC)
    payload = {
        "sub": principal_id,
        "email": email,
        "role": claims.role.value if claims.role else None,
        "school_id": str(claims.school_id) if claims.school_id else None,
        "classroom_id": str(claims.classroom_id) if claims.classroom_id else None,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expiry_minutes),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
