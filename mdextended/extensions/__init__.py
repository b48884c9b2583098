"""inline extension handler registry and base types."""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Node


@dataclass
class Excerpt:
    """text handed to a handler, starting at the marker character."""

    text: str
    before: str
    context: str
    offset: int


@dataclass
class InlineMatch:
    """
    successful handler result.

    ``extent`` counts characters consumed from ``position`` (defaults to the
    marker offset). ``inner`` is a (start, end) range relative to the marker
    whose text is scanned again to produce the element's children.
    """

    node: Node
    extent: int
    position: Optional[int] = None
    inner: Optional[tuple[int, int]] = None
    non_nestable: tuple[str, ...] = ()


class InlineHandler(Protocol):  # pylint: disable=too-few-public-methods
    """protocol for inline extension handlers."""

    name: str
    markers: str
    priority: int
    feature: Optional[str]

    def match(
        self, excerpt: Excerpt, config: FeatureConfig
    ) -> Optional[InlineMatch]:
        """returns a match for the excerpt, or None."""


class InlineRegistry:
    """registry for inline extension handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, InlineHandler] = {}

    def register(self, handler_instance: InlineHandler) -> None:
        """registers a handler under its name, replacing any previous one."""
        self._handlers[handler_instance.name] = handler_instance

    def get(self, name: str) -> InlineHandler:
        """returns the handler registered under name."""
        return self._handlers[name]

    def handlers(self) -> list[InlineHandler]:
        """returns registered handlers in registration order."""
        return list(self._handlers.values())


# global registry
registry = InlineRegistry()

ESCAPE = "escape"

T = TypeVar("T")


def inline_handler(
    name: str,
    markers: str,
    priority: int = 0,
    feature: Optional[str] = None,
    target_registry: InlineRegistry = registry,
) -> Callable[[type[T]], type[T]]:
    """
    decorator to register an inline extension handler.

    Args:
        name: handler identifier, also used in non-nestable sets
        markers: characters that trigger the handler
        priority: higher values are tried first for a shared marker
        feature: config path that must be enabled for the handler to run
        target_registry: registry to register with (defaults to global)

    Returns:
        decorator function
    """

    def decorator(cls: type[T]) -> type[T]:
        cls.name = name  # type: ignore[attr-defined]
        cls.markers = markers  # type: ignore[attr-defined]
        cls.priority = priority  # type: ignore[attr-defined]
        cls.feature = feature  # type: ignore[attr-defined]
        target_registry.register(cls())  # type: ignore[arg-type]
        return cls

    return decorator


# registers built-in handlers
# pylint: disable=wrong-import-position
from mdextended.extensions import emphasis, latex, typography  # noqa: E402,F401
