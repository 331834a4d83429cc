"""Unit tests for SessionService."""

from uuid import uuid4

import pytest

from genie.config import AuthSettings
from genie.domain.error import UnauthenticatedError
from genie.domain.model import Principal
from genie.domain.service import SessionService
from genie.domain.value import Claims, ClassroomId, PrincipalId, Role, SchoolId
from genie.util.jwt import JWTError

SETTINGS = AuthSettings(jwt_secret="test-secret")


def make_principal(claims: Claims | None = None) -> Principal:
    return Principal(
        id=PrincipalId(uuid4()),
        email="someone@example.com",
        claims=claims or Claims(),
    )


class TestIssueAndVerify:
    def test_token_carries_claims_snapshot(self):
        claims = Claims(
            role=Role.TEACHER,
            school_id=SchoolId(uuid4()),
            classroom_id=ClassroomId(uuid4()),
        )
        principal = make_principal(claims)
        service = SessionService(SETTINGS)

        payload = service.verify(service.issue(principal))

        assert payload.principal_id == str(principal.id)
        assert payload.email == "someone@example.com"
        assert payload.claims().matches(claims)

    def test_unprovisioned_principal_has_empty_claims(self):
        service = SessionService(SETTINGS)
        payload = service.verify(service.issue(make_principal()))
        assert payload.claims() == Claims()

    def test_expired_token_rejected(self):
        service = SessionService(AuthSettings(jwt_secret="s", jwt_expiry_minutes=-1))
        token = service.issue(make_principal())

        with pytest.raises(JWTError, match="expired"):
            service.verify(token)

    def test_token_signed_with_other_secret_rejected(self):
        token = SessionService(AuthSettings(jwt_secret="other")).issue(
            make_principal()
        )

        with pytest.raises(JWTError, match="Invalid"):
            SessionService(SETTINGS).verify(token)


class TestAuthenticate:
    def test_bearer_header(self):
        service = SessionService(SETTINGS)
        principal = make_principal()
        token = service.issue(principal)

        payload = service.authenticate(f"Bearer {token}")

        assert payload.principal_id == str(principal.id)

    def test_scheme_is_case_insensitive(self):
        service = SessionService(SETTINGS)
        token = service.issue(make_principal())
        service.authenticate(f"bearer {token}")

    @pytest.mark.parametrize(
        "header", [None, "", "Bearer", "Bearer   ", "Basic abc", "Token xyz"]
    )
    def test_missing_or_malformed_header(self, header):
        with pytest.raises(UnauthenticatedError):
            SessionService(SETTINGS).authenticate(header)

    def test_garbage_token(self):
        with pytest.raises(UnauthenticatedError):
            SessionService(SETTINGS).authenticate("Bearer not-a-jwt")
