"""abbreviation definitions (*[HTML]: Hyper Text Markup Language) and <abbr> wrapping."""

import re
from collections.abc import Mapping

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mdextended.core.config import FeatureConfig
from mdextended.plugins.blocks import line_at

DEFINITION_PATTERN = re.compile(r"^\*\[(.+?)\]:[ ]*(.+?)[ ]*$")

ENV_KEY = "mdextended_abbreviations"


def abbreviation_pattern(abbreviations: Mapping[str, str]) -> "re.Pattern[str]":
    """compiles a whole-word pattern matching any abbreviation, longest first."""
    alternatives = "|".join(
        re.escape(name) for name in sorted(abbreviations, key=len, reverse=True)
    )
    return re.compile(rf"(?<!\w)({alternatives})(?!\w)")


def _expand(
    children: list[Token], pattern: "re.Pattern[str]", abbreviations: Mapping[str, str]
) -> list[Token]:
    out: list[Token] = []
    for child in children:
        if child.type != "text":
            out.append(child)
            continue

        last = 0
        for m in pattern.finditer(child.content):
            if m.start() > last:
                out.append(
                    Token("text", "", 0, content=child.content[last : m.start()])
                )
            opener = Token("abbr_open", "abbr", 1)
            opener.attrSet("title", str(abbreviations[m.group(1)]))
            out.append(opener)
            out.append(Token("text", "", 0, content=m.group(1)))
            out.append(Token("abbr_close", "abbr", -1))
            last = m.end()

        if last == 0:
            out.append(child)
        elif last < len(child.content):
            out.append(Token("text", "", 0, content=child.content[last:]))
    return out


def abbreviations_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """
    plugin collecting abbreviation definitions and marking their uses.

    Definitions are document-wide and may appear anywhere; configured
    ``abbreviations.predefined`` entries apply to every document and are
    overridden by definitions of the same name.
    """

    def abbreviation_definition(
        state: StateBlock, startLine: int, endLine: int, silent: bool
    ) -> bool:
        if not config.enabled("abbreviations.allow_custom"):
            return False
        # indented code
        if state.sCount[startLine] - state.blkIndent >= 4:
            return False

        m = DEFINITION_PATTERN.match(line_at(state, startLine).text)
        if m is None:
            return False
        if silent:
            return True

        state.env.setdefault(ENV_KEY, {})[m.group(1)] = m.group(2)
        state.line = startLine + 1
        return True

    def abbreviations(state: StateCore) -> None:
        if not config.enabled("abbreviations"):
            return

        table = {
            str(name): str(title)
            for name, title in config.get("abbreviations.predefined").items()
        }
        table.update(state.env.get(ENV_KEY, {}))
        if not table:
            return

        pattern = abbreviation_pattern(table)
        for token in state.tokens:
            if token.type == "inline" and token.children:
                token.children = _expand(token.children, pattern, table)

    md.block.ruler.before(
        "reference",
        "abbreviation_definition",
        abbreviation_definition,
        {"alt": ["paragraph", "reference"]},
    )
    md.core.ruler.after("inline", "abbreviations", abbreviations)
