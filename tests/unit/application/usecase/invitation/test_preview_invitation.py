"""Unit tests for PreviewInvitationUseCase."""

from datetime import timedelta

import pytest

from genie.application.usecase.invitation import (
    PreviewInvitationRequest,
    PreviewInvitationUseCase,
)
from genie.domain.error import (
    InvalidInvitationError,
    InvitationAlreadyUsedError,
    InvitationExpiredError,
)
from genie.domain.value import Grade, InvitableRole
from tests.conftest import create_school_with_classroom, save_link
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestPreviewInvitation:
    @pytest.mark.asyncio
    async def test_active_link_projects_public_fields(self, unit_env):
        # Arrange
        school, classroom = await create_school_with_classroom(
            unit_env, classroom_name="CE1 B", grade=Grade.CE1
        )
        link = await save_link(unit_env, classroom, InvitableRole.PARENT)
        use_case = await unit_env.get(PreviewInvitationUseCase)

        # Act
        preview = await use_case.execute(
            PreviewInvitationRequest(token=link.token.root)
        )

        # Assert
        assert preview.ok is True
        assert preview.school_id == school.id
        assert preview.classroom_id == classroom.id
        assert preview.intended_role == InvitableRole.PARENT
        assert preview.expires_at == link.expires_at
        assert preview.classroom is not None
        assert preview.classroom.name == "CE1 B"
        assert preview.classroom.grade == Grade.CE1

        body = preview.model_dump()
        assert "used_at" not in body
        assert "created_by" not in body

    @pytest.mark.asyncio
    async def test_preview_does_not_consume(self, unit_env):
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER)
        use_case = await unit_env.get(PreviewInvitationUseCase)

        await use_case.execute(PreviewInvitationRequest(token=link.token.root))
        again = await use_case.execute(PreviewInvitationRequest(token=link.token.root))

        assert again.token == link.token.root

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(PreviewInvitationUseCase)

        with pytest.raises(InvalidInvitationError):
            await use_case.execute(PreviewInvitationRequest(token="nope-nope-nope"))

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(
            unit_env, classroom, InvitableRole.PARENT, expires_in=timedelta(days=-1)
        )
        use_case = await unit_env.get(PreviewInvitationUseCase)

        with pytest.raises(InvitationExpiredError):
            await use_case.execute(PreviewInvitationRequest(token=link.token.root))

    @pytest.mark.asyncio
    async def test_used_teacher_token(self, unit_env):
        _, classroom = await create_school_with_classroom(unit_env)
        link = await save_link(unit_env, classroom, InvitableRole.TEACHER, used=True)
        use_case = await unit_env.get(PreviewInvitationUseCase)

        with pytest.raises(InvitationAlreadyUsedError):
            await use_case.execute(PreviewInvitationRequest(token=link.token.root))
