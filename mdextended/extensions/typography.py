"""typographer and smartypants substitution handlers."""

import html as html_lib
import re
from typing import Optional

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Text
from mdextended.extensions import Excerpt, InlineMatch, inline_handler

SYMBOL_PATTERN = re.compile(r"^\((c|r|tm|p)\)", re.IGNORECASE)
SYMBOLS = {"c": "©", "r": "®", "tm": "™", "p": "¶"}
TRAILING_DOTS_PATTERN = re.compile(r"^([!?])\.{3,}")
DOTS_PATTERN = re.compile(r"^\.{2,}")
ELLIPSIS_PATTERN = re.compile(r"^\.{3}(?!\.)")

# characters after which a quote opens rather than closes
OPENING_CONTEXT = "([{-—–\"'"


def substitution(config: FeatureConfig, key: str) -> str:
    """returns a smartypants substitution with entities decoded."""
    return html_lib.unescape(str(config.get(f"smartypants.substitutions.{key}")))


def _literal(text: str, extent: int) -> InlineMatch:
    return InlineMatch(node=Text(text), extent=extent)


def _opens(excerpt: Excerpt, width: int) -> bool:
    """returns True if a quote of the given width sits in opening position."""
    before = excerpt.before
    if before and not before.isspace() and before not in OPENING_CONTEXT:
        return False
    following = excerpt.text[width : width + 1]
    return bool(following) and not following.isspace()


def _closes(excerpt: Excerpt) -> bool:
    return bool(excerpt.before) and not excerpt.before.isspace()


@inline_handler("typographer", "(+!?.", priority=20, feature="typographer")
class TypographerHandler:  # pylint: disable=too-few-public-methods
    """replaces (c), (r), (tm), (p), +- and runs of dots with typographic symbols."""

    def match(
        self, excerpt: Excerpt, config: FeatureConfig
    ) -> Optional[InlineMatch]:
        text = excerpt.text
        first = text[0]

        if first == "(":
            m = SYMBOL_PATTERN.match(text)
            if m is None:
                return None
            return _literal(SYMBOLS[m.group(1).lower()], m.end())

        if first == "+":
            return _literal("±", 2) if text.startswith("+-") else None

        if first in "!?":
            m = TRAILING_DOTS_PATTERN.match(text)
            if m is None:
                return None
            return _literal(f"{m.group(1)}..", m.end())

        m = DOTS_PATTERN.match(text)
        if m is None:
            return None
        if config.enabled("smartypants.smart_ellipses"):
            return _literal(substitution(config, "ellipses"), m.end())
        return _literal("...", m.end())


@inline_handler("smartypants", "`\"'<>-.", priority=30, feature="smartypants")
class SmartypantsHandler:  # pylint: disable=too-few-public-methods
    """educates quotes, dashes and ellipses."""

    def match(  # pylint: disable=too-many-return-statements
        self, excerpt: Excerpt, config: FeatureConfig
    ) -> Optional[InlineMatch]:
        text = excerpt.text
        first = text[0]

        if first == "`":
            if (
                config.enabled("smartypants.smart_backticks")
                and text.startswith("``")
                and _opens(excerpt, 2)
                and "''" in text[2:]
            ):
                return _literal(substitution(config, "left_double_quote"), 2)
            return None

        if first == "'":
            if (
                text.startswith("''")
                and config.enabled("smartypants.smart_backticks")
                and _closes(excerpt)
            ):
                return _literal(substitution(config, "right_double_quote"), 2)
            if not config.enabled("smartypants.smart_quotes"):
                return None
            if _opens(excerpt, 1) and "'" in text[1:]:
                return _literal(substitution(config, "left_single_quote"), 1)
            if _closes(excerpt):
                return _literal(substitution(config, "right_single_quote"), 1)
            return None

        if first == '"':
            if not config.enabled("smartypants.smart_quotes"):
                return None
            if _opens(excerpt, 1) and '"' in text[1:]:
                return _literal(substitution(config, "left_double_quote"), 1)
            if _closes(excerpt):
                return _literal(substitution(config, "right_double_quote"), 1)
            return None

        if first in "<>":
            if not config.enabled("smartypants.smart_angled_quotes"):
                return None
            if text.startswith("<<") and _opens(excerpt, 2) and ">>" in text[2:]:
                return _literal(substitution(config, "left_angle_quote"), 2)
            if text.startswith(">>") and _closes(excerpt):
                return _literal(substitution(config, "right_angle_quote"), 2)
            return None

        if first == "-":
            if not config.enabled("smartypants.smart_dashes"):
                return None
            if text.startswith("---"):
                return _literal(substitution(config, "mdash"), 3)
            if text.startswith("--"):
                return _literal(substitution(config, "ndash"), 2)
            return None

        if (
            config.enabled("smartypants.smart_ellipses")
            and excerpt.before != "."
            and ELLIPSIS_PATTERN.match(text)
        ):
            return _literal(substitution(config, "ellipses"), 3)
        return None
