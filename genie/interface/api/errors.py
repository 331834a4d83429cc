"""Translation of domain errors into HTTP responses.

Error bodies are ``{"detail": {"code": ..., "message": ...}}`` so callers
can branch on ``code`` without parsing messages.
"""

from typing import NoReturn

from fastapi import HTTPException, status

from genie.domain.error import DomainError

MISSING_PARAMS = "missing_params"

STATUS_BY_CODE: dict[str, int] = {
    "unauthenticated": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "invalid_invitation": status.HTTP_400_BAD_REQUEST,
    "expired": status.HTTP_400_BAD_REQUEST,
    "already_used": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_400_BAD_REQUEST,
    "storage_error": status.HTTP_400_BAD_REQUEST,
    MISSING_PARAMS: status.HTTP_400_BAD_REQUEST,
}


def error_detail(code: str, message: str) -> dict[str, str]:
    return {"code": code, "message": message}


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTPException carrying its code."""
    return HTTPException(
        status_code=STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
        detail=error_detail(error.code, str(error)),
    )


def missing_params(message: str) -> NoReturn:
    """Reject a request whose body names no target."""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=error_detail(MISSING_PARAMS, message),
    )
