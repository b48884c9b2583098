"""marking, insertion, keystroke, superscript and subscript handlers."""

import re
from typing import Optional

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Element, Text
from mdextended.extensions import Excerpt, InlineMatch, inline_handler

MARK_PATTERN = re.compile(r"^==((?:\\=|[^=]|=[^=]*=)+?)==(?!=)", re.DOTALL)
INSERTION_PATTERN = re.compile(r"^\+\+((?:\\\+|[^+]|\+[^+]*\+)+?)\+\+(?!\+)")
KEYSTROKE_PATTERN = re.compile(r"^\[\[([^\[\]]*|[\[\]])\]\](?!\])")
SUPERSCRIPT_PATTERN = re.compile(r"^\^((?:\\\^|[^^]|\^[^^]+?\^\^)+?)\^(?!\^)")
SUBSCRIPT_PATTERN = re.compile(r"^~((?:\\~|[^~]|~~[^~]*~~)+?)~(?!~)")


def _wrap(
    name: str, tag: str, match: "re.Match[str]", delimiter_length: int
) -> InlineMatch:
    """builds a nestable-content element match from a delimiter regex match."""
    start = delimiter_length
    return InlineMatch(
        node=Element(tag),
        extent=match.end(),
        inner=(start, start + len(match.group(1))),
        non_nestable=(name,),
    )


@inline_handler("marking", "=", priority=50, feature="emphasis.mark")
class MarkingHandler:  # pylint: disable=too-few-public-methods
    """renders ==text== as <mark>."""

    def match(
        self, excerpt: Excerpt, _config: FeatureConfig
    ) -> Optional[InlineMatch]:
        m = MARK_PATTERN.match(excerpt.text)
        if m is None:
            return None
        return _wrap("marking", "mark", m, 2)


@inline_handler("insertions", "+", priority=50, feature="emphasis.insertions")
class InsertionHandler:  # pylint: disable=too-few-public-methods
    """renders ++text++ as <ins>."""

    def match(
        self, excerpt: Excerpt, _config: FeatureConfig
    ) -> Optional[InlineMatch]:
        m = INSERTION_PATTERN.match(excerpt.text)
        if m is None:
            return None
        return _wrap("insertions", "ins", m, 2)


@inline_handler("keystrokes", "[", priority=50, feature="emphasis.keystrokes")
class KeystrokeHandler:  # pylint: disable=too-few-public-methods
    """renders [[key]] as <kbd>, keeping the key text literal."""

    def match(
        self, excerpt: Excerpt, _config: FeatureConfig
    ) -> Optional[InlineMatch]:
        m = KEYSTROKE_PATTERN.match(excerpt.text)
        if m is None:
            return None
        return InlineMatch(
            node=Element("kbd", children=[Text(m.group(1))]),
            extent=m.end(),
        )


@inline_handler("superscript", "^", priority=50, feature="emphasis.superscript")
class SuperscriptHandler:  # pylint: disable=too-few-public-methods
    """renders ^text^ as <sup>."""

    def match(
        self, excerpt: Excerpt, _config: FeatureConfig
    ) -> Optional[InlineMatch]:
        if excerpt.text[1:2] == "^":
            return None
        m = SUPERSCRIPT_PATTERN.match(excerpt.text)
        if m is None:
            return None
        return _wrap("superscript", "sup", m, 1)


@inline_handler("subscript", "~", priority=50, feature="emphasis.subscript")
class SubscriptHandler:  # pylint: disable=too-few-public-methods
    """renders ~text~ as <sub>; ~~text~~ is left to strikethrough."""

    def match(
        self, excerpt: Excerpt, _config: FeatureConfig
    ) -> Optional[InlineMatch]:
        if excerpt.text[1:2] == "~":
            return None
        m = SUBSCRIPT_PATTERN.match(excerpt.text)
        if m is None:
            return None
        return _wrap("subscript", "sub", m, 1)
