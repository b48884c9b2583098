"""display math blocks delimited by $$...$$ or \\[...\\]."""

import logging
import re
from typing import Optional

from mdextended.blocks import Block, Line
from mdextended.core.config import FeatureConfig

logger = logging.getLogger(__name__)


class MathBlockMachine:
    """collects display math verbatim, delimiters included."""

    name = "math_block"
    feature = "math.block.enabled"

    def __init__(self, config: FeatureConfig) -> None:
        self.config = config

    def _delimiters(self) -> list[tuple[str, str]]:
        return [
            (str(d["left"]), str(d["right"]))
            for d in self.config.get("math.block.delimiters")
            if isinstance(d, dict) and d.get("left") and d.get("right")
        ]

    def begin(self, line: Line) -> Optional[Block]:
        for left, right in self._delimiters():
            if not line.text.startswith(left):
                continue
            m = re.match(
                rf"^({re.escape(left)})(.*?)(?:({re.escape(right)})(.*)|$)",
                line.text,
            )
            if m is None:
                continue
            block = Block(kind=self.name, opener=left, closer=right, body=m.group(2))
            if m.group(3) is not None:
                block.text = left + m.group(2) + right + m.group(4)
                block.complete = True
            return block
        return None

    def continue_(self, line: Line, block: Block) -> Optional[Block]:
        if block.complete:
            return None

        if block.interrupted:
            block.body += "\n" * block.interrupted
            block.interrupted = 0

        m = re.match(rf"^{re.escape(block.closer)}(.*)", line.text)
        if m is not None:
            block.text = block.opener + block.body + "\n" + block.closer + m.group(1)
            block.complete = True
            return block

        block.body += "\n" + line.body
        return block

    def complete(self, block: Block) -> Block:
        if not block.complete:
            logger.debug("unterminated math block closed at end of input")
            block.text = block.opener + block.body
            block.complete = True
        return block
