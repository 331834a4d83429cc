"""Unit tests for sign up, session refresh and current session use cases."""

from uuid import UUID, uuid4

import pytest

from genie.application.usecase.auth import (
    GetCurrentSessionUseCase,
    RefreshSessionUseCase,
    SignUpUseCase,
)
from genie.application.usecase.auth.get_current_session import (
    GetCurrentSessionRequest,
)
from genie.application.usecase.auth.refresh_session import RefreshSessionRequest
from genie.application.usecase.auth.sign_up import SignUpRequest
from genie.domain.error import UnauthenticatedError
from genie.domain.service import IdentityService, SessionService
from genie.domain.value import Claims, PrincipalId, Role
from tests.conftest import create_school_with_classroom, provision
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSignUp:
    @pytest.mark.asyncio
    async def test_creates_unprovisioned_principal(self, unit_env):
        use_case = await unit_env.get(SignUpUseCase)

        response = await use_case.execute(
            SignUpRequest(email=" Paul@Example.com ", first_name="Paul")
        )

        session_service = await unit_env.get(SessionService)
        payload = session_service.verify(response.token)
        assert payload.principal_id == response.principal_id
        assert payload.email == "paul@example.com"
        assert payload.claims() == Claims()

        identity_service = await unit_env.get(IdentityService)
        principal_id = PrincipalId(UUID(payload.principal_id))
        principal = await identity_service.get_principal(principal_id)
        assert principal.user_metadata == {"first_name": "Paul"}


class TestRefreshSession:
    @pytest.mark.asyncio
    async def test_new_token_reflects_updated_claims(self, unit_env):
        # Arrange: sign up, then claims change behind the token's back
        sign_up = await unit_env.get(SignUpUseCase)
        signed_up = await sign_up.execute(SignUpRequest(email="prof@example.com"))
        identity_service = await unit_env.get(IdentityService)
        principal = await identity_service.get_principal(
            PrincipalId(UUID(signed_up.principal_id))
        )
        school, classroom = await create_school_with_classroom(unit_env)
        await provision(unit_env, principal, Role.TEACHER, school, classroom)
        use_case = await unit_env.get(RefreshSessionUseCase)

        # Act
        response = await use_case.execute(
            RefreshSessionRequest(principal_id=signed_up.principal_id)
        )

        # Assert
        expected = Claims(
            role=Role.TEACHER, school_id=school.id, classroom_id=classroom.id
        )
        assert response.claims == expected
        session_service = await unit_env.get(SessionService)
        assert session_service.verify(response.token).claims().matches(expected)

    @pytest.mark.asyncio
    async def test_unknown_principal(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(RefreshSessionRequest(principal_id=str(uuid4())))


class TestGetCurrentSession:
    @pytest.mark.asyncio
    async def test_fresh_token_is_not_stale(self, unit_env):
        sign_up = await unit_env.get(SignUpUseCase)
        signed_up = await sign_up.execute(SignUpRequest(email="a@example.com"))
        use_case = await unit_env.get(GetCurrentSessionUseCase)

        response = await use_case.execute(
            GetCurrentSessionRequest(token=signed_up.token)
        )

        assert response.stale is False
        assert response.profile is None
        assert response.email == "a@example.com"

    @pytest.mark.asyncio
    async def test_token_minted_before_provisioning_is_stale(self, unit_env):
        sign_up = await unit_env.get(SignUpUseCase)
        signed_up = await sign_up.execute(SignUpRequest(email="a@example.com"))
        identity_service = await unit_env.get(IdentityService)
        principal = await identity_service.get_principal(
            PrincipalId(UUID(signed_up.principal_id))
        )
        school, classroom = await create_school_with_classroom(unit_env)
        await provision(unit_env, principal, Role.PARENT, school, classroom)
        use_case = await unit_env.get(GetCurrentSessionUseCase)

        response = await use_case.execute(
            GetCurrentSessionRequest(token=signed_up.token)
        )

        assert response.stale is True
        assert response.token_claims == Claims()
        assert response.claims.role == Role.PARENT
        assert response.profile is not None
        assert response.profile.role == Role.PARENT

    @pytest.mark.asyncio
    async def test_invalid_token(self, unit_env):
        use_case = await unit_env.get(GetCurrentSessionUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(GetCurrentSessionRequest(token="garbage"))
