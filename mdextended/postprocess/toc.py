"""table of contents assembly and placeholder substitution."""

import hashlib
import html as html_lib
import json
import re
import secrets
from dataclasses import asdict, dataclass
from typing import Optional

from markdown_it import MarkdownIt

# generated once per process
SALT = secrets.token_hex(16)

LINK_TEXT_SPECIALS = re.compile(r"([\\`*_\[\]<>&!])")


@dataclass
class TocEntry:
    """one heading recorded for the table of contents."""

    text: str
    id: str
    level: int


def placeholder_for(tag: str) -> str:
    """returns the opaque token that stands in for the TOC tag during parsing."""
    return hashlib.sha256((SALT + tag).encode("utf-8")).hexdigest()


class TableOfContents:
    """ordered heading entries for one document."""

    def __init__(self) -> None:
        self.entries: list[TocEntry] = []
        self.first_level: Optional[int] = None

    def reset(self) -> None:
        self.entries = []
        self.first_level = None

    def add(self, text: str, anchor_id: str, level: int) -> None:
        if self.first_level is None:
            self.first_level = level
        self.entries.append(TocEntry(text=text, id=anchor_id, level=level))

    def indent(self, level: int) -> int:
        """returns the nesting depth of a heading level, starting at 1."""
        first = self.first_level if self.first_level is not None else level
        return max(1, level - (first - 1))

    def to_markdown(self) -> str:
        """
        returns the entries as a nested Markdown list.

        A heading that skips levels nests at most one step below the
        previous entry.
        """
        lines = []
        previous = 0
        for entry in self.entries:
            depth = min(self.indent(entry.level), previous + 1)
            previous = depth
            text = LINK_TEXT_SPECIALS.sub(r"\\\1", entry.text)
            lines.append(f"{'  ' * depth}- [{text}](#{entry.id})\n")
        return "".join(lines)

    def to_json(self) -> str:
        return json.dumps([asdict(entry) for entry in self.entries])

    def to_html(self) -> str:
        if not self.entries:
            return ""
        return str(MarkdownIt("commonmark").render(self.to_markdown()))

    def render(self, kind: str = "string") -> str:
        """
        serializes the entries.

        Args:
            kind: "string" for HTML, "json" for ordered records, "markdown"
                for the nested list source

        Raises:
            ValueError: for any other kind
        """
        if kind == "string":
            return self.to_html()
        if kind == "json":
            return self.to_json()
        if kind == "markdown":
            return self.to_markdown()
        raise ValueError(f"Unknown contents list type: {kind}")

    def substitute(self, html: str, tag: str, container_id: str) -> str:
        """
        replaces the placeholder paragraph with the rendered TOC.

        Any other occurrence of the placeholder, such as inside code, is
        restored to the literal tag.
        """
        placeholder = placeholder_for(tag)
        html = html.replace(
            f"<p>{placeholder}</p>",
            f'<div id="{html_lib.escape(container_id)}">{self.to_html()}</div>',
        )
        return html.replace(placeholder, html_lib.escape(tag, quote=False))
