"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from genie.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container with mocks for every mockable component.

    Settings are loaded from environment variables.

    Args:
        unmock: Components to wire with production implementations instead

    Returns:
        Container usable directly or behind the FastAPI app

    Raises:
        ValueError: If an unknown component is requested

    Examples:
        # Unit and e2e tests: in-memory repositories
        container = build_test_container()

        # Integration tests: PostgreSQL at DATABASE__URL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    # FastapiProvider lets the same container back the app in HTTP tests
    return make_async_container(*providers, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject component names no provider declares.

    Raises:
        ValueError: If unknown components are requested
    """
    known = {base.__mock_component__ for base in PROVIDERS} - {None}
    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
