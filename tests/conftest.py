"""Test configuration and shared helpers."""

from datetime import timedelta

import logfire
from dishka import AsyncContainer

from genie.domain.model import Classroom, InvitationLink, Principal, Profile, School
from genie.domain.model.common import utc_now
from genie.domain.repository import InvitationLinkRepository
from genie.domain.service import IdentityService, ProfileService, SchoolService
from genie.domain.value import Grade, InvitableRole, InvitationToken, Role

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


async def register_principal(
    env: AsyncContainer, email: str = "someone@example.com", **metadata
) -> Principal:
    """Create an unprovisioned principal, as signup would."""
    identity_service = await env.get(IdentityService)
    return await identity_service.register(email, metadata)


async def create_school_with_classroom(
    env: AsyncContainer,
    school_name: str = "École Jules Ferry",
    classroom_name: str = "CP A",
    grade: Grade = Grade.CP,
) -> tuple[School, Classroom]:
    school_service = await env.get(SchoolService)
    school = await school_service.create_school(school_name)
    classroom = await school_service.create_classroom(school.id, classroom_name, grade)
    return school, classroom


async def provision(
    env: AsyncContainer,
    principal: Principal,
    role: Role,
    school: School,
    classroom: Classroom | None = None,
) -> Profile:
    """Give a principal a profile and matching claims."""
    profile_service = await env.get(ProfileService)
    identity_service = await env.get(IdentityService)
    profile = await profile_service.promote(
        principal,
        role=role,
        school_id=school.id,
        classroom_id=classroom.id if classroom else None,
    )
    await identity_service.update_claims(principal.id, profile.to_claims())
    return profile


async def director_with_classroom(
    env: AsyncContainer,
) -> tuple[Principal, School, Classroom]:
    """A director running a school with one classroom."""
    director = await register_principal(
        env, "directrice@example.com", first_name="Claire", last_name="Martin"
    )
    school, classroom = await create_school_with_classroom(env)
    await provision(env, director, Role.DIRECTOR, school)
    return director, school, classroom


async def save_link(
    env: AsyncContainer,
    classroom: Classroom,
    intended_role: InvitableRole,
    token: str = "fixed-token-0001",
    expires_in: timedelta = timedelta(days=7),
    used: bool = False,
) -> InvitationLink:
    """Write a link straight into the ledger."""
    now = utc_now()
    link = InvitationLink(
        token=InvitationToken(root=token),
        school_id=classroom.school_id,
        classroom_id=classroom.id,
        intended_role=intended_role,
        expires_at=now + expires_in,
        used_at=now if used else None,
        created_at=now,
    )
    repository = await env.get(InvitationLinkRepository)
    return await repository.save(link)
