"""markdown-it core rule restoring literal markup for disabled bold/italic."""

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from mdextended.core.config import FeatureConfig

TOGGLES = {"strong": "emphasis.bold", "em": "emphasis.italic"}


def emphasis_toggle_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """plugin turning strong/em tokens back into their delimiters when disabled."""

    def literal_emphasis(state: StateCore) -> None:
        disabled = {tag for tag, path in TOGGLES.items() if not config.enabled(path)}
        if not disabled:
            return
        for token in state.tokens:
            if token.type != "inline" or not token.children:
                continue
            for child in token.children:
                if child.tag in disabled and child.type in (
                    f"{child.tag}_open",
                    f"{child.tag}_close",
                ):
                    child.type = "text"
                    child.tag = ""
                    child.nesting = 0
                    child.content = child.markup

    md.core.ruler.after("inline", "literal_emphasis", literal_emphasis)
