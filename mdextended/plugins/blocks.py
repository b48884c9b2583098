"""markdown-it block rules driving the block extension machines."""

import html as html_lib
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

from mdextended.blocks import Block, BlockMachine, Line
from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Element, Text, text_content

INTERRUPTS = ["paragraph", "reference", "blockquote", "list"]


def line_at(state: StateBlock, line: int) -> Line:
    """builds a Line for a source line, relative to the current block indent."""
    begin = state.bMarks[line]
    end = state.eMarks[line]
    body_start = begin + min(state.tShift[line], state.blkIndent)
    return Line(
        body=state.src[body_start:end],
        text=state.src[begin + state.tShift[line] : end],
        indent=state.sCount[line],
    )


def _push_element(
    state: StateBlock, element: Element, token_type: str, line_map: list[int]
) -> None:
    token = state.push(f"{token_type}_open", element.name, 1)
    token.attrs = dict(element.attributes)
    token.map = line_map

    if element.children and all(isinstance(c, Text) for c in element.children):
        token = state.push("inline", "", 0)
        token.content = text_content(element.children)
        token.map = line_map
        token.children = []
    else:
        for child in element.children:
            if isinstance(child, Element):
                child_type = "paragraph" if child.name == "p" else child.name
                _push_element(state, child, child_type, line_map)

    state.push(f"{token_type}_close", element.name, -1)


def _push_block(state: StateBlock, block: Block, line_map: list[int]) -> None:
    if block.element is not None:
        _push_element(state, block.element, block.kind, line_map)
        return
    token = state.push(block.kind, "", 0)
    token.content = block.text
    token.map = line_map


def block_machine_plugin(
    md: MarkdownIt,
    machine: BlockMachine,
    config: FeatureConfig,
    before: str = "blockquote",
) -> None:
    """
    plugin running a BlockMachine as a markdown-it block rule.

    Blank lines are counted on the block rather than passed to the machine.
    A line the machine refuses is left for the following rules.
    """

    def rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        if not config.enabled(machine.feature):
            return False
        # indented code
        if state.sCount[startLine] - state.blkIndent >= 4:
            return False

        block = machine.begin(line_at(state, startLine))
        if block is None:
            return False
        if silent:
            return True

        last = startLine
        next_line = startLine + 1
        while next_line < endLine and not block.complete:
            if state.isEmpty(next_line):
                block.interrupted += 1
                next_line += 1
                continue
            if state.sCount[next_line] < state.blkIndent:
                break
            if machine.continue_(line_at(state, next_line), block) is None:
                break
            last = next_line
            next_line += 1

        block = machine.complete(block)
        state.line = last + 1
        _push_block(state, block, [startLine, state.line])
        return True

    md.block.ruler.before(before, machine.name, rule, {"alt": INTERRUPTS})


def math_block_plugin(md: MarkdownIt, machine: BlockMachine, config: FeatureConfig) -> None:
    """registers the math block rule and its renderer."""
    block_machine_plugin(md, machine, config)

    def render_math_block(
        self: Any, tokens: Any, idx: int, _options: Any, _env: Any
    ) -> str:
        return f"{html_lib.escape(tokens[idx].content)}\n"

    md.add_render_rule(machine.name, render_math_block)
