"""Unit tests for InvitationService."""

from datetime import timedelta

import pytest

from genie.config import InvitationSettings
from genie.domain.error import (
    InvalidInvitationError,
    InvitationAlreadyUsedError,
    InvitationExpiredError,
)
from genie.domain.model.common import utc_now
from genie.domain.repository import InvitationLinkRepository
from genie.domain.service import InvitationService
from genie.domain.value import InvitableRole, InvitationToken
from tests.conftest import create_school_with_classroom, save_link
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestEnsureLink:
    """Tests for ensure_link."""

    @pytest.mark.asyncio
    async def test_mints_link_with_configured_ttl(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        now = utc_now()

        link, created = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None, now=now
        )

        assert created is True
        assert link.expires_at == now + timedelta(days=7)
        assert link.school_id == classroom.school_id
        assert link.classroom_id == classroom.id
        assert link.used_at is None
        assert len(link.token.root) >= 40

    @pytest.mark.asyncio
    async def test_repeated_calls_return_the_same_token(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)

        first, _ = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )
        second, created = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )

        assert created is False
        assert second.token == first.token

    @pytest.mark.asyncio
    async def test_roles_get_distinct_links(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)

        parent_link, _ = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )
        teacher_link, _ = await invitation_service.ensure_link(
            classroom, InvitableRole.TEACHER, created_by=None
        )

        assert parent_link.token != teacher_link.token

    @pytest.mark.asyncio
    async def test_expired_link_is_replaced(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        stale = await save_link(
            unit_env, classroom, InvitableRole.PARENT, expires_in=timedelta(seconds=-1)
        )

        link, created = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )

        assert created is True
        assert link.token != stale.token

    @pytest.mark.asyncio
    async def test_newest_active_link_wins(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        repository = await unit_env.get(InvitationLinkRepository)
        _, classroom = await create_school_with_classroom(unit_env)
        older = await save_link(
            unit_env, classroom, InvitableRole.PARENT, "older-token"
        )
        newer = older.model_copy(
            update={
                "token": InvitationToken(root="newer-token"),
                "created_at": older.created_at + timedelta(seconds=5),
            }
        )
        await repository.save(newer)

        link, created = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )

        assert created is False
        assert link.token.root == "newer-token"


class TestResolve:
    """Tests for resolve: invalid, expired and used are distinct."""

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)

        with pytest.raises(InvalidInvitationError):
            await invitation_service.resolve("does-not-exist")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "   ", "x" * 300])
    async def test_malformed_token_is_invalid(self, unit_env, token):
        invitation_service = await unit_env.get(InvitationService)

        with pytest.raises(InvalidInvitationError):
            await invitation_service.resolve(token)

    @pytest.mark.asyncio
    async def test_expired_token_is_expired_not_invalid(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(
            unit_env, classroom, InvitableRole.PARENT, expires_in=timedelta(hours=-1)
        )

        with pytest.raises(InvitationExpiredError):
            await invitation_service.resolve(link.token.root)

    @pytest.mark.asyncio
    async def test_link_expiring_exactly_now_is_expired(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.PARENT)

        with pytest.raises(InvitationExpiredError):
            await invitation_service.resolve(link.token.root, now=link.expires_at)

    @pytest.mark.asyncio
    async def test_used_token_is_already_used(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER, used=True)

        with pytest.raises(InvitationAlreadyUsedError):
            await invitation_service.resolve(link.token.root)

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_ignored(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.PARENT)

        resolved = await invitation_service.resolve(f"  {link.token.root}\n")

        assert resolved.token == link.token


class TestMarkConsumed:
    """Tests for mark_consumed."""

    @pytest.mark.asyncio
    async def test_parent_link_stays_active(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.PARENT)

        await invitation_service.mark_consumed(link)

        resolved = await invitation_service.resolve(link.token.root)
        assert resolved.used_at is None

    @pytest.mark.asyncio
    async def test_teacher_link_is_marked_used(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER)

        marked = await invitation_service.mark_consumed(link)

        assert marked.used_at is not None
        with pytest.raises(InvitationAlreadyUsedError):
            await invitation_service.resolve(link.token.root)

    @pytest.mark.asyncio
    async def test_teacher_link_reusable_when_policy_disabled(self, unit_env):
        repository = await unit_env.get(InvitationLinkRepository)
        invitation_service = InvitationService(
            repository, InvitationSettings(single_use_teacher_links=False)
        )
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER)

        await invitation_service.mark_consumed(link)

        resolved = await invitation_service.resolve(link.token.root)
        assert resolved.used_at is None


class TestRevoke:
    """Tests for revoke_link and revoke_active."""

    @pytest.mark.asyncio
    async def test_revoke_active_then_ensure_mints_new_token(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        original, _ = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )

        revoked = await invitation_service.revoke_active(
            classroom.id, InvitableRole.PARENT
        )
        replacement, created = await invitation_service.ensure_link(
            classroom, InvitableRole.PARENT, created_by=None
        )

        assert revoked == 1
        assert created is True
        assert replacement.token != original.token
        with pytest.raises(InvitationExpiredError):
            await invitation_service.resolve(original.token.root)

    @pytest.mark.asyncio
    async def test_revoke_active_leaves_other_role_alone(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        teacher_link, _ = await invitation_service.ensure_link(
            classroom, InvitableRole.TEACHER, created_by=None
        )

        revoked = await invitation_service.revoke_active(
            classroom.id, InvitableRole.PARENT
        )

        assert revoked == 0
        await invitation_service.resolve(teacher_link.token.root)

    @pytest.mark.asyncio
    async def test_revoke_link_is_noop_when_inactive(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(
            unit_env, classroom, InvitableRole.PARENT, expires_in=timedelta(days=-1)
        )

        assert await invitation_service.revoke_link(link) is False

    @pytest.mark.asyncio
    async def test_revoke_link_expires_it(self, unit_env):
        invitation_service = await unit_env.get(InvitationService)
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER)

        assert await invitation_service.revoke_link(link) is True
        with pytest.raises(InvitationExpiredError):
            await invitation_service.resolve(link.token.root)
