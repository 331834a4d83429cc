"""Invitation deep links.

Links take the form ``<scheme>://<path>?token=<token>``. Parsing only relies
on the ``token`` query parameter, so universal links and development URLs
(``exp://host/--/invite?token=...``) resolve the same way.
"""

from urllib.parse import parse_qs, urlencode, urlsplit

from genie.config import InvitationSettings


def build_invite_url(token: str, settings: InvitationSettings) -> str:
    """Build the deep link a recipient opens to start signup."""
    query = urlencode({"token": token})
    return f"{settings.link_scheme}://{settings.link_path}?{query}"


def extract_invite_token(url: str) -> str | None:
    """Extract the invitation token from a deep link.

    Args:
        url: Any URL carrying a ``token`` query parameter

    Returns:
        The token, or None when absent or blank
    """
    values = parse_qs(urlsplit(url.strip()).query).get("token")
    if not values:
        return None
    token = values[0].strip()
    return token or None
