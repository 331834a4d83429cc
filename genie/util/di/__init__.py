"""Dependency injection module.

Providers are listed once in ``PROVIDERS``. A provider with subclasses is a
mockable component; the subclass with the matching ``__is_mock__`` flag is
picked when containers are built.
"""

from typing import Type

from genie.util.di.application import ProdApplicationProvider
from genie.util.di.base import Component, ProviderBase
from genie.util.di.core import ProdConfigProvider
from genie.util.di.domain import ProdDomainProvider
from genie.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    # Settings, services and use cases
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Repositories: PostgreSQL in production, in-memory in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        ``base`` itself when it has no implementations, otherwise the
        implementation whose ``__is_mock__`` equals ``use_mock``

    Raises:
        ValueError: If no implementation of the requested kind is loaded
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    component = getattr(base, "__mock_component__", None) or base.__name__
    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
