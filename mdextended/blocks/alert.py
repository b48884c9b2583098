"""GitHub-style alert callouts: > [!NOTE] and friends."""

import re
from typing import Optional

from mdextended.blocks import Block, Line
from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Element, Text

QUOTED_LINE_PATTERN = re.compile(r"^> ?(.*)")


class AlertMachine:
    """builds alert blocks from blockquote-style lines."""

    name = "alert"
    feature = "alerts"

    def __init__(self, config: FeatureConfig) -> None:
        self.config = config

    def _start_pattern(self) -> "re.Pattern[str]":
        types = "|".join(re.escape(str(t)) for t in self.config.get("alerts.types"))
        return re.compile(rf"^> \[!({types})\]", re.IGNORECASE)

    def begin(self, line: Line) -> Optional[Block]:
        types = self.config.get("alerts.types")
        if not types or not line.text.startswith(">"):
            return None
        m = self._start_pattern().match(line.text)
        if m is None:
            return None

        alert_type = m.group(1).lower()
        css = str(self.config.get("alerts.class"))
        element = Element(
            "div",
            attributes={"class": f"{css} {css}-{alert_type}"},
            children=[
                Element(
                    "p",
                    attributes={"class": f"{css}-title"},
                    children=[Text(alert_type.capitalize())],
                )
            ],
        )
        return Block(kind=self.name, element=element)

    def continue_(self, line: Line, block: Block) -> Optional[Block]:
        if block.complete or block.element is None:
            return None
        if self.begin(line) is not None:
            return None

        m = QUOTED_LINE_PATTERN.match(line.text)
        if m is not None:
            if block.interrupted:
                block.element.children.append(Element("p"))
                block.interrupted = 0
            block.element.children.append(Element("p", children=[Text(m.group(1))]))
            return block

        # lazy continuation only while no blank line intervened
        if block.interrupted:
            return None
        block.element.children.append(Element("p", children=[Text(line.text)]))
        return block

    def complete(self, block: Block) -> Block:
        block.complete = True
        return block
