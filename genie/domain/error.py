"""Domain layer errors.

Every error carries a stable ``code`` so callers can tell failure kinds
apart across the HTTP boundary. Only ``StorageError`` is safe to retry.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"

    @classmethod
    def from_message(cls, message: str) -> "DomainError":
        """Rebuild an error received as a code and message over HTTP."""
        return cls(message)


class UnauthenticatedError(DomainError):
    """No valid caller identity."""

    code = "unauthenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ForbiddenError(DomainError):
    """Caller lacks the role or scope relationship the action needs."""

    code = "forbidden"

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class InvalidInvitationError(DomainError):
    """Invitation token does not exist or is malformed."""

    code = "invalid_invitation"

    def __init__(self, message: str = "Invalid invitation"):
        super().__init__(message)


class InvitationExpiredError(DomainError):
    """Invitation existed but its validity window has passed."""

    code = "expired"

    def __init__(self, message: str = "Invitation expired"):
        super().__init__(message)


class InvitationAlreadyUsedError(DomainError):
    """Single-use invitation has already been consumed."""

    code = "already_used"

    def __init__(self, message: str = "Invitation already used"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a referenced resource does not exist."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")

    @classmethod
    def from_message(cls, message: str) -> "NotFoundError":
        resource, _, identifier = message.partition(" not found: ")
        return cls(resource, identifier)


class StorageError(DomainError):
    """Persistence failed after validation passed; the call can be retried."""

    code = "storage_error"


ERRORS_BY_CODE: dict[str, type[DomainError]] = {
    cls.code: cls
    for cls in (
        UnauthenticatedError,
        ForbiddenError,
        InvalidInvitationError,
        InvitationExpiredError,
        InvitationAlreadyUsedError,
        NotFoundError,
        StorageError,
    )
}
