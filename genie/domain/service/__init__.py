"""Domain services."""

from .authorization import (
    AuthorizationService,
    InvitationAction,
    ScopeRelation,
)
from .base import Service
from .identity_service import IdentityService
from .invitation_service import InvitationService
from .profile_service import ProfileService
from .school_service import SchoolService
from .session_service import SessionService

__all__ = [
    "AuthorizationService",
    "IdentityService",
    "InvitationAction",
    "InvitationService",
    "ProfileService",
    "SchoolService",
    "ScopeRelation",
    "Service",
    "SessionService",
]
