"""Base class for Genie's dishka providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components tests can swap for in-memory implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider carrying the metadata used to pick mock or production wiring.

    Attributes:
        __mock_component__: Component name on mockable bases, None otherwise
        __is_mock__: True on the implementation used by tests
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
