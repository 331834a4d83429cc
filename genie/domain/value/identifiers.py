"""Strongly typed identifiers for Genie domain entities."""

from typing import NewType
from uuid import UUID

PrincipalId = NewType("PrincipalId", UUID)
SchoolId = NewType("SchoolId", UUID)
ClassroomId = NewType("ClassroomId", UUID)
