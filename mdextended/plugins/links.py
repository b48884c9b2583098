"""markdown-it core rule decorating external and email links."""

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mdextended.core.config import FeatureConfig

ABSOLUTE_URL_PATTERN = re.compile(r"^(?:https?:)?//", re.IGNORECASE)
REL_OPTIONS = ("nofollow", "noopener", "noreferrer")


def _bare_host(host: str) -> str:
    host = host.lower()
    return host[4:] if host.startswith("www.") else host


def is_external(href: str, internal_hosts: Iterable[str] = ()) -> bool:
    """returns True for absolute http(s) links to hosts not listed as internal."""
    if not ABSOLUTE_URL_PATTERN.match(href):
        return False
    host = _bare_host(urlsplit(href).hostname or "")
    return bool(host) and host not in {_bare_host(h) for h in internal_hosts}


def _decorate(children: list[Token], config: FeatureConfig) -> list[Token]:
    out: list[Token] = []
    dropping = False
    for token in children:
        if token.type == "link_close" and dropping:
            dropping = False
            continue
        if token.type != "link_open":
            out.append(token)
            continue

        href = str(token.attrGet("href") or "")
        if href.lower().startswith("mailto:"):
            if not config.enabled("links.email_links"):
                dropping = True
                continue
            token.attrSet("target", "_blank")
        elif config.enabled("links.external_links") and is_external(
            href, config.get("links.external_links.internal_hosts")
        ):
            rel = [
                name
                for name in REL_OPTIONS
                if config.enabled(f"links.external_links.{name}")
            ]
            if rel:
                token.attrSet("rel", " ".join(rel))
            if config.enabled("links.external_links.open_in_new_window"):
                token.attrSet("target", "_blank")
        out.append(token)
    return out


def links_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """plugin adding rel/target attributes and gating email links."""

    def decorate_links(state: StateCore) -> None:
        if not config.enabled("links"):
            return
        for token in state.tokens:
            if token.type == "inline" and token.children:
                token.children = _decorate(token.children, config)

    md.core.ruler.after("inline", "decorate_links", decorate_links)
