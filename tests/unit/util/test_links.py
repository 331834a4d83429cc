"""Unit tests for invitation deep links."""

import pytest

from genie.config import InvitationSettings
from genie.util.links import build_invite_url, extract_invite_token


class TestBuildInviteUrl:
    def test_default_scheme(self):
        url = build_invite_url("abc_123-XYZ", InvitationSettings())
        assert url == "futurgenie://invite?token=abc_123-XYZ"

    def test_configured_scheme(self):
        settings = InvitationSettings(link_scheme="https", link_path="genie.app/join")
        assert build_invite_url("t0k", settings) == "https://genie.app/join?token=t0k"

    def test_round_trips_through_extract(self):
        url = build_invite_url("abc_123-XYZ", InvitationSettings())
        assert extract_invite_token(url) == "abc_123-XYZ"


class TestExtractInviteToken:
    @pytest.mark.parametrize(
        "url",
        [
            "futurgenie://invite?token=T0KEN",
            "https://genie.app/invite?foo=1&token=T0KEN",
            "exp://192.168.1.10:8081/--/invite?token=T0KEN",
            "  futurgenie://invite?token=T0KEN  ",
        ],
    )
    def test_token_query_parameter(self, url):
        assert extract_invite_token(url) == "T0KEN"

    @pytest.mark.parametrize(
        "url",
        [
            "futurgenie://invite",
            "futurgenie://invite?token=",
            "futurgenie://invite?token=%20%20",
            "futurgenie://invite/T0KEN",
        ],
    )
    def test_missing_or_blank_token(self, url):
        assert extract_invite_token(url) is None
