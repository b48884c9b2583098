"""fenced mermaid and chart.js diagrams."""

import html as html_lib
from typing import Any, cast

from markdown_it import MarkdownIt

from mdextended.core.config import FeatureConfig


def diagrams_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """plugin rendering ```mermaid and ```chart fences as diagram containers."""
    default_fence = md.renderer.rules["fence"]

    def render_fence(self: Any, tokens: Any, idx: int, options: Any, env: Any) -> str:
        token = tokens[idx]
        info = token.info.strip()
        lang = info.split(maxsplit=1)[0] if info else ""
        content = html_lib.escape(token.content)

        if lang == "mermaid" and config.enabled("diagrams.mermaid"):
            return f'<div class="mermaid">{content}</div>\n'
        if lang == "chart" and config.enabled("diagrams.chartjs"):
            return f'<canvas class="chartjs">{content}</canvas>\n'
        return cast(str, default_fence(tokens, idx, options, env))

    md.add_render_rule("fence", render_fence)
