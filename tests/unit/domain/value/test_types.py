"""Unit tests for domain value objects and entity predicates."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from genie.domain.model import InvitationLink, Principal
from genie.domain.model.common import utc_now
from genie.domain.value import (
    Claims,
    ClassroomId,
    InvitableRole,
    InvitationToken,
    PrincipalId,
    Role,
    SchoolId,
    normalize_role,
)


class TestNormalizeRole:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("DIRECTOR", Role.DIRECTOR),
            ("directeur", Role.DIRECTOR),
            (" Teacher ", Role.TEACHER),
            ("enseignant", Role.TEACHER),
            ("prof", Role.TEACHER),
            ("parents", Role.PARENT),
            ("Parent", Role.PARENT),
        ],
    )
    def test_known_aliases(self, raw, expected):
        assert normalize_role(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "admin", "student"])
    def test_unknown_values(self, raw):
        assert normalize_role(raw) is None


class TestInvitationToken:
    def test_strips_whitespace(self):
        assert InvitationToken(root="  abc123  ").root == "abc123"

    def test_rejects_blank(self):
        with pytest.raises(ValidationError):
            InvitationToken(root="   ")

    def test_masked_keeps_only_prefix(self):
        token = InvitationToken(root="abcdefghijklmnop")
        assert token.masked() == "abcdefgh..."


class TestClaims:
    @pytest.mark.parametrize(
        "raw,expected",
        [("teacher", Role.TEACHER), ("Directeur", Role.DIRECTOR), ("janitor", None)],
    )
    def test_role_read_from_loose_values(self, raw, expected):
        assert Claims.model_validate({"role": raw}).role == expected

    def test_matches_same_role_and_placement(self):
        school_id, classroom_id = SchoolId(uuid4()), ClassroomId(uuid4())
        first = Claims(role=Role.PARENT, school_id=school_id, classroom_id=classroom_id)
        second = Claims(
            role=Role.PARENT, school_id=school_id, classroom_id=classroom_id
        )
        assert first.matches(second)

    def test_empty_claims_do_not_match_provisioned(self):
        provisioned = Claims(role=Role.DIRECTOR, school_id=SchoolId(uuid4()))
        assert not Claims().matches(provisioned)

    def test_role_mismatch(self):
        school_id = SchoolId(uuid4())
        assert not Claims(role=Role.TEACHER, school_id=school_id).matches(
            Claims(role=Role.PARENT, school_id=school_id)
        )


class TestInvitationLink:
    def make_link(self, intended_role=InvitableRole.PARENT, **kwargs) -> InvitationLink:
        now = utc_now()
        fields = {
            "token": InvitationToken(root="tok-123456789"),
            "school_id": SchoolId(uuid4()),
            "classroom_id": ClassroomId(uuid4()),
            "intended_role": intended_role,
            "expires_at": now + timedelta(days=7),
        }
        fields.update(kwargs)
        return InvitationLink(**fields)

    def test_active_before_expiry(self):
        link = self.make_link()
        assert link.is_active(link.expires_at - timedelta(microseconds=1))

    def test_inactive_at_expiry_instant(self):
        link = self.make_link()
        assert not link.is_active(link.expires_at)
        assert link.is_expired(link.expires_at)

    def test_used_link_is_inactive(self):
        link = self.make_link(InvitableRole.TEACHER, used_at=utc_now())
        assert not link.is_active(utc_now())
        assert not link.is_expired(utc_now())

    def test_only_parent_links_are_reusable(self):
        assert self.make_link(InvitableRole.PARENT).is_reusable
        assert not self.make_link(InvitableRole.TEACHER).is_reusable

    def test_intended_role_maps_to_profile_role(self):
        assert InvitableRole.TEACHER.role == Role.TEACHER
        assert InvitableRole.PARENT.role == Role.PARENT

    def test_director_is_not_invitable(self):
        with pytest.raises(ValidationError):
            self.make_link(intended_role="DIRECTOR")


class TestPrincipalDisplayName:
    def make_principal(self, **metadata) -> Principal:
        return Principal(id=PrincipalId(uuid4()), user_metadata=metadata)

    def test_first_and_last_name_joined(self):
        principal = self.make_principal(first_name="Marie", last_name="Curie")
        assert principal.display_name == "Marie Curie"

    def test_blank_parts_skipped(self):
        principal = self.make_principal(first_name="  ", last_name="Curie")
        assert principal.display_name == "Curie"

    def test_falls_back_to_full_name(self):
        principal = self.make_principal(full_name="Marie Skłodowska-Curie")
        assert principal.display_name == "Marie Skłodowska-Curie"

    def test_none_without_metadata(self):
        assert self.make_principal().display_name is None
