"""Domain model entities for Genie."""

from genie.domain.model.invitation import InvitationLink
from genie.domain.model.principal import Principal
from genie.domain.model.profile import Profile
from genie.domain.model.school import Classroom, School

__all__ = [
    "Classroom",
    "InvitationLink",
    "Principal",
    "Profile",
    "School",
]
