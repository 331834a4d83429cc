"""Caller-side helpers for the Genie API."""

from genie.client.api import GenieAPIError, GenieClient
from genie.client.session import (
    ClaimsPropagationTimeout,
    SessionController,
    SessionState,
)

__all__ = [
    "ClaimsPropagationTimeout",
    "GenieAPIError",
    "GenieClient",
    "SessionController",
    "SessionState",
]
