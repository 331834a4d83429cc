"""Repository interfaces for the Genie domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from genie.domain.repository.invitation import InvitationLinkRepository
from genie.domain.repository.principal import PrincipalRepository
from genie.domain.repository.profile import ProfileRepository
from genie.domain.repository.school import ClassroomRepository, SchoolRepository
from genie.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "ClassroomRepository",
    "InvitationLinkRepository",
    "PrincipalRepository",
    "ProfileRepository",
    "SchoolRepository",
    "UnitOfWork",
]
