"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationLinkRepository
from .principal import InMemoryPrincipalRepository
from .profile import InMemoryProfileRepository
from .school import InMemoryClassroomRepository, InMemorySchoolRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryClassroomRepository",
    "InMemoryInvitationLinkRepository",
    "InMemoryPrincipalRepository",
    "InMemoryProfileRepository",
    "InMemorySchoolRepository",
    "InMemoryUnitOfWork",
]
