"""markdown-it inline rules that hand marker characters to the dispatcher."""

from collections.abc import Iterable

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from mdextended.core.dispatcher import InlineDispatcher
from mdextended.core.nodes import Element, Node, Raw, Text
from mdextended.extensions import Excerpt, InlineMatch
from mdextended.extensions.latex import opens_inline_math

# characters markdown-it's own text rule stops at
BASE_TERMINATORS = frozenset("\n!#$%&*+-:<=>@[\\]^_`{}~")

NON_NESTABLE_KEY = "mdextended_non_nestable"


def _open(state: StateInline, element: Element) -> None:
    if element.name:
        token = state.push(f"{element.name}_open", element.name, 1)
        token.attrs = dict(element.attributes)


def _close(state: StateInline, element: Element) -> None:
    if element.name:
        state.push(f"{element.name}_close", element.name, -1)


def push_nodes(state: StateInline, nodes: Iterable[Node]) -> None:
    """pushes nodes onto the inline token stream."""
    for node in nodes:
        if isinstance(node, Text):
            token = state.push("text", "", 0)
            token.content = node.text
        elif isinstance(node, Raw):
            token = state.push("html_inline", "", 0)
            token.content = node.html
        else:
            _open(state, node)
            push_nodes(state, node.children)
            _close(state, node)


def _push_match(
    state: StateInline, result: InlineMatch, marker_at: int, non_nestable: frozenset
) -> None:
    node = result.node
    if result.inner is None or not isinstance(node, Element):
        push_nodes(state, [node])
        return

    inner_start, inner_end = result.inner
    pos_max = state.posMax
    _open(state, node)
    state.pos = marker_at + inner_start
    state.posMax = marker_at + inner_end
    state.env[NON_NESTABLE_KEY] = non_nestable | frozenset(result.non_nestable)
    state.md.inline.tokenize(state)
    state.env[NON_NESTABLE_KEY] = non_nestable
    state.posMax = pos_max
    _close(state, node)


def extended_inline_plugin(md: MarkdownIt, dispatcher: InlineDispatcher) -> None:
    """
    plugin wiring the inline dispatcher into markdown-it.

    Replaces the ``text`` rule so plain runs also stop at extension markers,
    and adds an ``extended`` rule right after it.
    """
    markers = frozenset(dispatcher.table.markers)
    stops = BASE_TERMINATORS | markers

    def text(state: StateInline, silent: bool) -> bool:
        pos = state.pos
        while pos < state.posMax and state.src[pos] not in stops:
            pos += 1
        if pos == state.pos:
            return False
        if not silent:
            state.pending += state.src[state.pos : pos]
        state.pos = pos
        return True

    def extended(state: StateInline, silent: bool) -> bool:
        pos = state.pos
        marker = state.src[pos]
        if marker not in markers:
            return False

        excerpt = Excerpt(
            text=state.src[pos : state.posMax],
            before=state.src[pos - 1] if pos else "",
            context=state.src,
            offset=pos,
        )
        non_nestable = state.env.get(NON_NESTABLE_KEY, frozenset())
        found = dispatcher.match(
            excerpt, non_nestable, floor=pos - len(state.pending)
        )

        if found is None:
            # a deferred escape keeps its backslash
            if marker == "\\" and opens_inline_math(excerpt, dispatcher.config):
                if not silent:
                    state.pending += marker
                state.pos += 1
                return True
            return False

        _handler, result = found
        start = pos if result.position is None else result.position
        end = min(max(start + result.extent, pos + 1), state.posMax)
        if not silent:
            if start < pos:
                state.pending = state.pending[: len(state.pending) - (pos - start)]
            _push_match(state, result, pos, non_nestable)
        state.pos = end
        return True

    md.inline.ruler.at("text", text)
    md.inline.ruler.after("text", "extended", extended)
