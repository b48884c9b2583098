"""multi-line block extensions driven line by line."""

from dataclasses import dataclass
from typing import Optional, Protocol

from mdextended.core.nodes import Element


@dataclass
class Line:
    """one source line: raw body, indentation-stripped text and indent width."""

    body: str
    text: str
    indent: int = 0


@dataclass
class Block:
    """
    state of a block being built.

    ``interrupted`` counts blank lines seen since the last consumed line; the
    driver increments it and machines reset it when they absorb a line.
    """

    kind: str
    element: Optional[Element] = None
    text: str = ""
    body: str = ""
    opener: str = ""
    closer: str = ""
    interrupted: int = 0
    complete: bool = False


class BlockMachine(Protocol):
    """begin/continue/complete contract for block extensions."""

    name: str
    feature: str

    def begin(self, line: Line) -> Optional[Block]:
        """starts a block on a matching line, or returns None."""

    def continue_(self, line: Line, block: Block) -> Optional[Block]:
        """absorbs a non-blank line; None means the block ended before it."""

    def complete(self, block: Block) -> Block:
        """finalizes the block; always succeeds."""
