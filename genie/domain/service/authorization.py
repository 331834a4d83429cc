"""Authorization matrix for invitation issuance and revocation.

Every permission is one row keyed by (action, requester role, requester's
relation to the target classroom, intended role). Anything not listed is
forbidden.
"""

from enum import Enum

import logfire

from genie.domain.error import ForbiddenError
from genie.domain.model import Classroom, Profile
from genie.domain.value import InvitableRole, Role

from .base import Service


class InvitationAction(str, Enum):
    """Actions guarded by the matrix."""

    ISSUE = "issue"
    REVOKE = "revoke"


class ScopeRelation(str, Enum):
    """How a requester relates to the classroom an action targets."""

    SCHOOL_DIRECTOR = "school_director"  # Director of the classroom's school
    CLASSROOM_TEACHER = "classroom_teacher"  # Teacher assigned to this classroom
    NONE = "none"


INVITATION_PERMISSIONS: frozenset[
    tuple[InvitationAction, Role, ScopeRelation, InvitableRole]
] = frozenset(
    {
        (
            InvitationAction.ISSUE,
            Role.DIRECTOR,
            ScopeRelation.SCHOOL_DIRECTOR,
            InvitableRole.PARENT,
        ),
        (
            InvitationAction.ISSUE,
            Role.DIRECTOR,
            ScopeRelation.SCHOOL_DIRECTOR,
            InvitableRole.TEACHER,
        ),
        (
            InvitationAction.ISSUE,
            Role.TEACHER,
            ScopeRelation.CLASSROOM_TEACHER,
            InvitableRole.PARENT,
        ),
        (
            InvitationAction.REVOKE,
            Role.DIRECTOR,
            ScopeRelation.SCHOOL_DIRECTOR,
            InvitableRole.PARENT,
        ),
        (
            InvitationAction.REVOKE,
            Role.DIRECTOR,
            ScopeRelation.SCHOOL_DIRECTOR,
            InvitableRole.TEACHER,
        ),
    }
)


def scope_relation(profile: Profile, classroom: Classroom) -> ScopeRelation:
    """Derive the requester's relation to a classroom from their profile."""
    if (
        profile.role == Role.DIRECTOR
        and profile.school_id is not None
        and profile.school_id == classroom.school_id
    ):
        return ScopeRelation.SCHOOL_DIRECTOR
    if profile.role == Role.TEACHER and profile.classroom_id == classroom.id:
        return ScopeRelation.CLASSROOM_TEACHER
    return ScopeRelation.NONE


def is_allowed(
    action: InvitationAction,
    role: Role,
    relation: ScopeRelation,
    intended_role: InvitableRole,
) -> bool:
    """Look up one cell of the matrix."""
    return (action, role, relation, intended_role) in INVITATION_PERMISSIONS


class AuthorizationService(Service):
    """Domain service applying the invitation matrix to real requesters."""

    def authorize(
        self,
        action: InvitationAction,
        requester: Profile | None,
        classroom: Classroom,
        intended_role: InvitableRole,
    ) -> None:
        """Check that ``requester`` may perform ``action`` on ``classroom``.

        Args:
            action: Issue or revoke
            requester: Requester's profile (None when not provisioned yet)
            classroom: Target classroom
            intended_role: Role of the link being issued or revoked

        Raises:
            ForbiddenError: If the matrix has no matching row
        """
        with logfire.span(
            "authorization_service.authorize",
            action=action.value,
            classroom_id=str(classroom.id),
            intended_role=intended_role.value,
        ):
            if requester is None:
                logfire.warn("Requester has no profile", action=action.value)
                raise ForbiddenError("Profile not found")

            relation = scope_relation(requester, classroom)
            if not is_allowed(action, requester.role, relation, intended_role):
                logfire.warn(
                    "Invitation action forbidden",
                    requester_id=str(requester.id),
                    role=requester.role.value,
                    relation=relation.value,
                    action=action.value,
                    intended_role=intended_role.value,
                )
                raise ForbiddenError(
                    f"{requester.role.value} cannot {action.value} "
                    f"{intended_role.value} links for this classroom"
                )

            logfire.info(
                "Invitation action authorized",
                requester_id=str(requester.id),
                relation=relation.value,
                action=action.value,
            )
