"""extended Markdown engine built on markdown-it-py."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from markdown_it import MarkdownIt
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from mdextended.blocks.alert import AlertMachine
from mdextended.blocks.math_block import MathBlockMachine
from mdextended.core.config import FeatureConfig
from mdextended.core.dispatcher import InlineDispatcher, MarkerTable
from mdextended.core.nodes import Node
from mdextended.plugins import (
    abbreviations_plugin,
    block_machine_plugin,
    comments_plugin,
    diagrams_plugin,
    emphasis_toggle_plugin,
    extended_inline_plugin,
    headings_plugin,
    links_plugin,
    math_block_plugin,
    table_spans_plugin,
)
from mdextended.postprocess.anchors import AnchorCallback, AnchorIdGenerator
from mdextended.postprocess.toc import TableOfContents, TocEntry, placeholder_for

logger = logging.getLogger(__name__)

# option path -> markdown-it rules it switches
RULE_GATES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("code.inline", ("backticks",)),
    ("code.blocks", ("code", "fence")),
    ("images", ("image",)),
    ("allow_raw_html", ("html_inline", "html_block")),
    ("emphasis.strikethroughs", ("strikethrough",)),
    ("tables", ("table",)),
    ("thematic_breaks", ("hr",)),
    ("quotes", ("blockquote",)),
    ("references", ("reference",)),
    ("headings", ("heading", "lheading")),
    ("links", ("link", "autolink")),
    ("lists", ("list",)),
    ("lists.tasks", ("github-tasklists",)),
    (
        "footnotes",
        ("footnote_def", "footnote_inline", "footnote_ref", "footnote_tail"),
    ),
    ("definition_lists", ("deflist",)),
)


class ExtendedMarkdown:
    """
    renders extended Markdown to HTML.

    One instance owns its configuration and per-document state; render calls
    are not reentrant.
    """

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None) -> None:
        self._config = FeatureConfig(overrides)
        self.markers = MarkerTable.from_registry()
        self.dispatcher = InlineDispatcher(self.markers, self._config)
        self.anchors = AnchorIdGenerator(self._config)
        self.toc = TableOfContents()

        self.md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
        self.md.use(footnote_plugin).use(deflist_plugin).use(tasklists_plugin)
        self.md.use(extended_inline_plugin, self.dispatcher)
        self.md.use(block_machine_plugin, AlertMachine(self._config), self._config)
        self.md.use(math_block_plugin, MathBlockMachine(self._config), self._config)
        self.md.use(table_spans_plugin, self._config)
        self.md.use(headings_plugin, self._config, self.anchors, self.toc)
        self.md.use(links_plugin, self._config)
        self.md.use(emphasis_toggle_plugin, self._config)
        self.md.use(diagrams_plugin, self._config)
        self.md.use(abbreviations_plugin, self._config)
        self.md.use(comments_plugin, self._config)

    def config(self) -> FeatureConfig:
        return self._config

    def set_anchor_id_callback(self, callback: Optional[AnchorCallback]) -> None:
        """installs a function(text, config) -> id that replaces auto anchors."""
        self.anchors.callback = callback

    @property
    def toc_entries(self) -> list[TocEntry]:
        return list(self.toc.entries)

    def _reset(self) -> None:
        self.anchors.reset()
        self.toc.reset()

    def _sync_rules(self) -> None:
        for path, rules in RULE_GATES:
            if self._config.enabled(path):
                self.md.enable(list(rules), ignoreInvalid=True)
            else:
                self.md.disable(list(rules), ignoreInvalid=True)

    def render(self, text: str) -> str:
        """
        renders a full document.

        Args:
            text: Markdown source

        Returns:
            HTML with the TOC tag replaced when the toc feature is on
        """
        self._reset()
        self._sync_rules()

        toc_on = self._config.enabled("toc")
        tag = str(self._config.get("toc.tag"))
        if toc_on and tag:
            text = text.replace(tag, placeholder_for(tag))

        html = str(self.md.render(text, {}))
        logger.debug(
            "rendered %d char(s), %d toc entr(ies)", len(text), len(self.toc.entries)
        )

        if toc_on and tag:
            html = self.toc.substitute(html, tag, str(self._config.get("toc.id")))
        return html

    def render_inline(self, text: str) -> str:
        """renders a single line without block constructs."""
        self._sync_rules()
        return str(self.md.renderInline(text, {}))

    def scan(self, text: str) -> list[Node]:
        """runs only the extension handlers over text."""
        return self.dispatcher.scan(text)

    def contents_list(self, kind: str = "string") -> str:
        """returns the last rendered document's TOC as HTML, JSON or Markdown."""
        return self.toc.render(kind)
