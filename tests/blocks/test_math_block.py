"""tests for the display math block machine."""

import logging

import pytest

from mdextended.blocks import Line
from mdextended.blocks.math_block import MathBlockMachine
from mdextended.core.config import FeatureConfig


def _line(text: str) -> Line:
    return Line(body=text, text=text)


def _machine() -> MathBlockMachine:
    return MathBlockMachine(FeatureConfig({"math": True}))


def test_multiline_block_keeps_delimiters() -> None:
    """$$ / x^2 / $$ is collected verbatim."""
    machine = _machine()
    block = machine.begin(_line("$$"))
    assert block is not None

    block = machine.continue_(_line("x^2"), block)
    assert block is not None
    block = machine.continue_(_line("$$"), block)
    assert block is not None

    assert block.complete is True
    assert block.text == "$$\nx^2\n$$"


def test_single_line_block_completes_immediately() -> None:
    """an opener and closer on one line finish the block at once."""
    block = _machine().begin(_line("$$a+b$$"))

    assert block is not None
    assert block.complete is True
    assert block.text == "$$a+b$$"


def test_bracket_delimiters() -> None:
    """\\[ ... \\] is a display math block."""
    machine = _machine()
    block = machine.begin(_line("\\[ y"))
    assert block is not None
    block = machine.continue_(_line("\\]"), block)

    assert block is not None
    assert block.text == "\\[ y\n\\]"


def test_begin_ignores_other_lines() -> None:
    """lines without a block delimiter do not start a block."""
    assert _machine().begin(_line("x = $y$")) is None


def test_blank_lines_are_replayed() -> None:
    """blank lines inside a block are preserved."""
    machine = _machine()
    block = machine.begin(_line("$$"))
    assert block is not None
    block = machine.continue_(_line("a"), block)
    assert block is not None
    block.interrupted = 1
    block = machine.continue_(_line("b"), block)
    assert block is not None
    block = machine.continue_(_line("$$"), block)

    assert block is not None
    assert block.text == "$$\na\n\nb\n$$"


def test_text_after_closer_is_kept() -> None:
    """trailing text on the closing line stays in the block."""
    machine = _machine()
    block = machine.begin(_line("$$"))
    assert block is not None
    block = machine.continue_(_line("$$ (1)"), block)

    assert block is not None
    assert block.text == "$$\n$$ (1)"


def test_complete_closes_unterminated_block(caplog: pytest.LogCaptureFixture) -> None:
    """an unterminated block ends with what was collected."""
    machine = _machine()
    block = machine.begin(_line("$$"))
    assert block is not None
    block = machine.continue_(_line("x"), block)
    assert block is not None

    with caplog.at_level(logging.DEBUG, logger="mdextended.blocks.math_block"):
        block = machine.complete(block)

    assert block.text == "$$\nx"
    assert "unterminated math block" in caplog.text


def test_completed_block_absorbs_nothing() -> None:
    """continue on a completed block ends it."""
    block = _machine().begin(_line("$$z$$"))
    assert block is not None

    assert _machine().continue_(_line("more"), block) is None
