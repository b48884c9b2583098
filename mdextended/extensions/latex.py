"""inline math and backslash-escape handlers."""

import re
import string
from collections.abc import Iterable
from functools import lru_cache
from typing import Any, Optional

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Text
from mdextended.extensions import ESCAPE, Excerpt, InlineMatch, inline_handler

ESCAPABLE = frozenset(string.punctuation)


def _delimiter_pattern(left: str, right: str) -> "re.Pattern[str]":
    """compiles the inline pattern for one delimiter pair."""
    lft = re.escape(left)
    rgt = re.escape(right)
    if left.startswith("\\") or len(left) > 1:
        body = rf"(?:\\{rgt}|\\{lft}|[^\r\n])+?"
    else:
        body = rf"(?:\\{rgt}|\\{lft}|[^{rgt}\r\n])+?"
    return re.compile(rf"^{lft}(?![\r\n])({body}){rgt}(?!\w)")


@lru_cache(maxsize=32)
def _compile_delimiters(
    pairs: tuple[tuple[str, str], ...]
) -> tuple["re.Pattern[str]", ...]:
    return tuple(_delimiter_pattern(left, right) for left, right in pairs)


def inline_math_patterns(delimiters: Iterable[Any]) -> tuple["re.Pattern[str]", ...]:
    """
    returns compiled patterns for configured inline math delimiters.

    Args:
        delimiters: sequence of {"left": ..., "right": ...} mappings

    Returns:
        tuple of compiled patterns, in configured order
    """
    pairs = tuple(
        (str(d["left"]), str(d["right"]))
        for d in delimiters
        if isinstance(d, dict) and d.get("left") and d.get("right")
    )
    return _compile_delimiters(pairs)


def opens_inline_math(excerpt: Excerpt, config: FeatureConfig) -> bool:
    """returns True if inline math is live and the excerpt opens a delimiter."""
    if not config.enabled("math.inline.enabled"):
        return False
    patterns = inline_math_patterns(config.get("math.inline.delimiters"))
    return any(p.match(excerpt.text) for p in patterns)


@inline_handler("math", "\\$", priority=100, feature="math.inline.enabled")
class InlineMathHandler:  # pylint: disable=too-few-public-methods
    """keeps inline math verbatim, delimiters included, for client-side typesetting."""

    def match(
        self, excerpt: Excerpt, config: FeatureConfig
    ) -> Optional[InlineMatch]:
        if excerpt.before and not excerpt.before.isspace():
            return None
        for pattern in inline_math_patterns(config.get("math.inline.delimiters")):
            m = pattern.match(excerpt.text)
            if m is not None:
                return InlineMatch(node=Text(m.group(0)), extent=m.end())
        return None


@inline_handler(ESCAPE, "\\")
class EscapeHandler:  # pylint: disable=too-few-public-methods
    """turns a backslash plus punctuation into the literal character."""

    def match(
        self, excerpt: Excerpt, config: FeatureConfig
    ) -> Optional[InlineMatch]:
        if len(excerpt.text) < 2 or excerpt.text[0] != "\\":
            return None
        if excerpt.text[1] not in ESCAPABLE:
            return None
        # an escape that could open inline math yields to the math handler
        if opens_inline_math(excerpt, config):
            return None
        return InlineMatch(node=Text(excerpt.text[1]), extent=2)
