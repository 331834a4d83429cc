"""Invitation use cases."""

from genie.application.usecase.invitation.consume_invitation import (
    ConsumeInvitationRequest,
    ConsumeInvitationResponse,
    ConsumeInvitationUseCase,
)
from genie.application.usecase.invitation.ensure_link import (
    EnsureInvitationLinkRequest,
    EnsureInvitationLinkResponse,
    EnsureInvitationLinkUseCase,
)
from genie.application.usecase.invitation.preview_invitation import (
    ClassroomSummary,
    PreviewInvitationRequest,
    PreviewInvitationResponse,
    PreviewInvitationUseCase,
)
from genie.application.usecase.invitation.revoke_invitation import (
    RevokeInvitationRequest,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
)

__all__ = [
    "ClassroomSummary",
    "ConsumeInvitationRequest",
    "ConsumeInvitationResponse",
    "ConsumeInvitationUseCase",
    "EnsureInvitationLinkRequest",
    "EnsureInvitationLinkResponse",
    "EnsureInvitationLinkUseCase",
    "PreviewInvitationRequest",
    "PreviewInvitationResponse",
    "PreviewInvitationUseCase",
    "RevokeInvitationRequest",
    "RevokeInvitationResponse",
    "RevokeInvitationUseCase",
]
