"""Domain value objects for Genie.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from genie.domain.value.common import RootValueObject, ValueObject
from genie.domain.value.identifiers import ClassroomId, SchoolId


class Role(str, Enum):
    """Application role carried by a profile and by session claims."""

    DIRECTOR = "DIRECTOR"
    TEACHER = "TEACHER"
    PARENT = "PARENT"


class InvitableRole(str, Enum):
    """Roles that can be granted through an invitation link."""

    PARENT = "PARENT"
    TEACHER = "TEACHER"

    @property
    def role(self) -> Role:
        """The profile role granted by consuming a link of this kind."""
        return Role(self.value)


class Grade(str, Enum):
    """Classroom grade level."""

    CP = "CP"
    CE1 = "CE1"
    CE2 = "CE2"
    CM1 = "CM1"
    CM2 = "CM2"
    SIXIEME = "6EME"
    CINQUIEME = "5EME"
    QUATRIEME = "4EME"
    TROISIEME = "3EME"


_ROLE_ALIASES: dict[str, Role] = {
    "DIRECTOR": Role.DIRECTOR,
    "DIRECTEUR": Role.DIRECTOR,
    "TEACHER": Role.TEACHER,
    "ENSEIGNANT": Role.TEACHER,
    "PROF": Role.TEACHER,
    "PARENT": Role.PARENT,
    "PARENTS": Role.PARENT,
}


def normalize_role(raw: object) -> Role | None:
    """Map a loosely formatted role string to a Role.

    Accepts case-insensitive English and French aliases.
    Returns None when the value is not recognized.
    """
    if raw is None:
        return None
    return _ROLE_ALIASES.get(str(raw).strip().upper())


class InvitationToken(RootValueObject[str]):
    """Opaque invitation token.

    Tokens are looked up by exact value, never scanned, so the only
    structural rule is a sane length with no surrounding whitespace.
    """

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is non-empty and bounded."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def masked(self) -> str:
        """Token prefix safe to write into logs."""
        return self.root[:8] + "..."


class Claims(ValueObject):
    """Authorization claims attached to a principal's session.

    Kept in lockstep with the principal's profile by invitation consumption
    and director onboarding.
    """

    role: Role | None = None
    school_id: SchoolId | None = None
    classroom_id: ClassroomId | None = None

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v: object) -> Role | None:
        """Read roles stored in any casing or alias; unknown roles grant nothing."""
        if isinstance(v, Role):
            return v
        return normalize_role(v)

    def matches(self, other: "Claims") -> bool:
        """Whether both claims bags grant the same role and placement."""
        return (
            self.role == other.role
            and self.school_id == other.school_id
            and self.classroom_id == other.classroom_id
        )
