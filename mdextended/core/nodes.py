"""document nodes produced by inline extensions and block machines."""

import html as html_lib
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

VOID_ELEMENTS = frozenset({"br", "hr", "img", "input"})


@dataclass
class Text:
    """plain text, escaped on output."""

    text: str


@dataclass
class Raw:
    """pre-rendered HTML passed through verbatim."""

    html: str


@dataclass
class Element:
    """
    HTML element with attributes and child nodes.

    An element with an empty name renders only its children.
    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)


Node = Union[Text, Element, Raw]


def text_content(nodes: Iterable[Node]) -> str:
    """returns the concatenated text of nodes, ignoring markup."""
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.text)
        elif isinstance(node, Element):
            parts.append(text_content(node.children))
    return "".join(parts)


def _render_attributes(attributes: dict[str, str]) -> str:
    return "".join(
        f' {name}="{html_lib.escape(value, quote=True)}"'
        for name, value in attributes.items()
    )


def nodes_to_html(nodes: Iterable[Node]) -> str:
    """
    serializes nodes to an HTML string.

    Args:
        nodes: nodes to serialize

    Returns:
        HTML fragment
    """
    out: list[str] = []
    for node in nodes:
        if isinstance(node, Text):
            out.append(html_lib.escape(node.text, quote=False))
        elif isinstance(node, Raw):
            out.append(node.html)
        elif not node.name:
            out.append(nodes_to_html(node.children))
        elif node.name in VOID_ELEMENTS:
            out.append(f"<{node.name}{_render_attributes(node.attributes)}>")
        else:
            out.append(
                f"<{node.name}{_render_attributes(node.attributes)}>"
                f"{nodes_to_html(node.children)}</{node.name}>"
            )
    return "".join(out)
