"""PostgreSQL repository implementations."""

from genie.persistence.repository.invitation import PostgresInvitationLinkRepository
from genie.persistence.repository.principal import PostgresPrincipalRepository
from genie.persistence.repository.profile import PostgresProfileRepository
from genie.persistence.repository.school import (
    PostgresClassroomRepository,
    PostgresSchoolRepository,
)

__all__ = [
    "PostgresClassroomRepository",
    "PostgresInvitationLinkRepository",
    "PostgresPrincipalRepository",
    "PostgresProfileRepository",
    "PostgresSchoolRepository",
]
