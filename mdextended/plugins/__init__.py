"""markdown-it-py plugins connecting the extension core to the base parser."""

from mdextended.plugins.abbreviations import abbreviations_plugin
from mdextended.plugins.blocks import block_machine_plugin, math_block_plugin
from mdextended.plugins.comments import comments_plugin
from mdextended.plugins.diagrams import diagrams_plugin
from mdextended.plugins.emphasis import emphasis_toggle_plugin
from mdextended.plugins.headings import headings_plugin
from mdextended.plugins.inline import extended_inline_plugin
from mdextended.plugins.links import links_plugin
from mdextended.plugins.tables import table_spans_plugin

__all__ = [
    "abbreviations_plugin",
    "block_machine_plugin",
    "comments_plugin",
    "diagrams_plugin",
    "emphasis_toggle_plugin",
    "extended_inline_plugin",
    "headings_plugin",
    "links_plugin",
    "math_block_plugin",
    "table_spans_plugin",
]
