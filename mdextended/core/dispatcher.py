"""marker table and inline dispatch scanner."""

import logging
import re
from collections.abc import Iterable
from typing import Optional

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Element, Node, Text
from mdextended.extensions import (
    ESCAPE,
    Excerpt,
    InlineHandler,
    InlineMatch,
    InlineRegistry,
    registry,
)

logger = logging.getLogger(__name__)


class MarkerTable:
    """
    maps marker characters to handlers in priority order.

    Built once and never changed. The escape handler is appended last for
    every marker whatever its registration order.
    """

    def __init__(self, handlers: Iterable[InlineHandler]) -> None:
        escape: Optional[InlineHandler] = None
        ordered: list[InlineHandler] = []
        for handler_instance in handlers:
            if handler_instance.name == ESCAPE:
                escape = handler_instance
            else:
                ordered.append(handler_instance)
        # sorted() is stable, so equal priorities keep registration order
        ordered = sorted(ordered, key=lambda h: -h.priority)

        table: dict[str, list[InlineHandler]] = {}
        for handler_instance in ordered:
            for marker in handler_instance.markers:
                table.setdefault(marker, []).append(handler_instance)
        if escape is not None:
            for marker in escape.markers:
                table.setdefault(marker, [])
            for candidates in table.values():
                candidates.append(escape)

        self._table: dict[str, tuple[InlineHandler, ...]] = {
            marker: tuple(candidates) for marker, candidates in table.items()
        }
        self.markers = "".join(self._table)
        self._pattern = re.compile(
            "[" + "".join(re.escape(m) for m in self.markers) + "]"
        )

    @classmethod
    def from_registry(cls, source: InlineRegistry = registry) -> "MarkerTable":
        return cls(source.handlers())

    def candidates(self, marker: str) -> tuple[InlineHandler, ...]:
        """returns handlers for a marker, highest priority first."""
        return self._table.get(marker, ())

    def names(self, marker: str) -> tuple[str, ...]:
        return tuple(h.name for h in self.candidates(marker))

    def find(self, text: str, offset: int = 0) -> int:
        """returns the offset of the next marker at or after offset, or -1."""
        m = self._pattern.search(text, offset)
        return m.start() if m else -1


class InlineDispatcher:
    """applies the highest-priority matching handler at each marker."""

    def __init__(self, table: MarkerTable, config: FeatureConfig) -> None:
        self.table = table
        self.config = config

    def match(
        self,
        excerpt: Excerpt,
        non_nestable: Iterable[str] = (),
        floor: int = 0,
    ) -> Optional[tuple[InlineHandler, InlineMatch]]:
        """
        tries each handler for the excerpt's marker in priority order.

        Args:
            excerpt: text from the marker onwards
            non_nestable: handler names that may not match here
            floor: earliest absolute position a lookbehind match may claim

        Returns:
            (handler, match) for the first success, or None
        """
        skipped = frozenset(non_nestable)
        for handler_instance in self.table.candidates(excerpt.text[:1]):
            if handler_instance.name in skipped:
                continue
            if handler_instance.feature and not self.config.enabled(
                handler_instance.feature
            ):
                continue
            result = handler_instance.match(excerpt, self.config)
            if result is None:
                continue
            start = excerpt.offset if result.position is None else result.position
            if start > excerpt.offset or start < floor:
                logger.debug(
                    "ignoring %s match at %d outside [%d, %d]",
                    handler_instance.name,
                    start,
                    floor,
                    excerpt.offset,
                )
                continue
            return handler_instance, result
        return None

    def scan(self, text: str, non_nestable: Iterable[str] = ()) -> list[Node]:
        """
        scans text for extension markers.

        Args:
            text: a single span of inline text
            non_nestable: handler names that may not match in this span

        Returns:
            nodes covering the whole input, left to right
        """
        skipped = frozenset(non_nestable)
        nodes: list[Node] = []
        emitted = 0
        offset = 0

        while True:
            marker_at = self.table.find(text, offset)
            if marker_at < 0:
                break

            excerpt = Excerpt(
                text=text[marker_at:],
                before=text[marker_at - 1] if marker_at else "",
                context=text,
                offset=marker_at,
            )
            found = self.match(excerpt, skipped, floor=emitted)
            if found is None:
                offset = marker_at + 1
                continue

            handler_instance, result = found
            start = marker_at if result.position is None else result.position
            # always advances at least one character
            end = max(start + result.extent, marker_at + 1)

            if start > emitted:
                nodes.append(Text(text[emitted:start]))
            node = result.node
            if result.inner is not None and isinstance(node, Element):
                inner_start, inner_end = result.inner
                node.children = self.scan(
                    text[marker_at + inner_start : marker_at + inner_end],
                    skipped | set(result.non_nestable),
                )
            nodes.append(node)
            emitted = offset = end
            logger.debug("%s matched %d char(s)", handler_instance.name, end - start)

        if emitted < len(text):
            nodes.append(Text(text[emitted:]))
        return _merge_text(nodes)


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].text + node.text)
        else:
            merged.append(node)
    return merged
