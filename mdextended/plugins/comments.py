"""markdown-it core rule removing HTML comments when they are switched off."""

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mdextended.core.config import FeatureConfig

COMMENT_PREFIX = "<!--"


def is_comment(token: Token) -> bool:
    """returns True for raw HTML tokens holding an HTML comment."""
    if token.type not in ("html_block", "html_inline"):
        return False
    return token.content.lstrip().startswith(COMMENT_PREFIX)


def comments_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """plugin dropping block and inline HTML comments unless ``comments`` is on."""

    def strip_comments(state: StateCore) -> None:
        if config.enabled("comments"):
            return

        tokens = [token for token in state.tokens if not is_comment(token)]
        for token in tokens:
            if token.type == "inline" and token.children:
                token.children = [c for c in token.children if not is_comment(c)]
        state.tokens = tokens

    md.core.ruler.after("inline", "strip_comments", strip_comments)
