"""markdown-it core rules for heading attributes, anchors and TOC entries."""

import re
from typing import Optional

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mdextended.core.config import FeatureConfig
from mdextended.postprocess.anchors import AnchorIdGenerator
from mdextended.postprocess.toc import TableOfContents

SPECIAL_ATTRIBUTES_PATTERN = re.compile(r"[ #]*\{((?:\s*[#.][\w-]+)+)\s*\}\s*$")
ATTRIBUTE_PATTERN = re.compile(r"([#.])([\w-]+)")


def parse_special_attributes(content: str) -> tuple[str, dict[str, str]]:
    """
    splits a trailing {#id .class} group off heading text.

    Returns:
        (remaining text, attributes); attributes is empty when none were found
    """
    m = SPECIAL_ATTRIBUTES_PATTERN.search(content)
    if m is None:
        return content, {}

    attributes: dict[str, str] = {}
    classes: list[str] = []
    for kind, value in ATTRIBUTE_PATTERN.findall(m.group(1)):
        if kind == "#":
            attributes["id"] = value
        else:
            classes.append(value)
    if classes:
        attributes["class"] = " ".join(classes)
    return content[: m.start()].rstrip(), attributes


def plain_text(inline: Token) -> str:
    """returns the visible text of an inline token's children."""
    parts: list[str] = []
    for child in inline.children or []:
        if child.type in ("text", "text_special", "code_inline"):
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return "".join(parts).strip()


def _demote(opener: Token, inline: Token, closer: Token) -> None:
    """turns a heading of a disallowed level back into a paragraph."""
    prefix = f"{opener.markup} " if opener.markup.startswith("#") else ""
    for token in (opener, closer):
        token.type = token.type.replace("heading", "paragraph")
        token.tag = "p"
        token.markup = ""
    if prefix:
        inline.content = prefix + inline.content
        inline.children = [Token("text", "", 0, content=prefix)] + list(
            inline.children or []
        )


def headings_plugin(
    md: MarkdownIt,
    config: FeatureConfig,
    anchors: AnchorIdGenerator,
    toc: TableOfContents,
) -> None:
    """plugin assigning heading ids and recording TOC entries."""

    def special_attributes(state: StateCore) -> None:
        if not config.enabled("headings.special_attributes"):
            return
        tokens = state.tokens
        for index, token in enumerate(tokens):
            if token.type != "heading_open":
                continue
            inline = tokens[index + 1]
            content, attributes = parse_special_attributes(inline.content)
            if not attributes:
                continue
            inline.content = content
            for name, value in attributes.items():
                token.attrSet(name, value)

    def heading_anchors(state: StateCore) -> None:
        allowed = config.get("headings.allowed_levels")
        toc_levels = config.get("toc.levels")
        tokens = state.tokens
        for index, token in enumerate(tokens):
            if token.type != "heading_open":
                continue
            inline = tokens[index + 1]
            if token.tag not in allowed:
                _demote(token, inline, tokens[index + 2])
                continue

            text = plain_text(inline)
            explicit = token.attrGet("id")
            anchor_id: Optional[str] = anchors.create(
                str(explicit) if explicit else text
            )
            if anchor_id is not None:
                token.attrSet("id", anchor_id)
            elif explicit:
                anchor_id = str(explicit)

            if anchor_id and config.enabled("toc") and token.tag in toc_levels:
                toc.add(text, anchor_id, int(token.tag[1:]))

    md.core.ruler.before("inline", "heading_attributes", special_attributes)
    md.core.ruler.after("inline", "heading_anchors", heading_anchors)
