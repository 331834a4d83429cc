"""School and classroom entities.

Only referenced by id from the invitation flow; the flow reads them to
check that a classroom belongs to the school implied by a request.
"""

from datetime import datetime

from pydantic import Field

from genie.domain.model.common import DomainModel, utc_now
from genie.domain.value import ClassroomId, Grade, SchoolId


class School(DomainModel):
    """School run by a director."""

    id: SchoolId
    name: str = Field(min_length=1, max_length=200)
    created_at: datetime = Field(default_factory=utc_now)


class Classroom(DomainModel):
    """Classroom inside a school."""

    id: ClassroomId
    school_id: SchoolId
    name: str = Field(min_length=1, max_length=200)
    grade: Grade
    created_at: datetime = Field(default_factory=utc_now)
