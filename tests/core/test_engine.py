"""tests for the ExtendedMarkdown engine surface."""

import pytest

from mdextended import ExtendedMarkdown
from mdextended.core.errors import InvalidPath, TypeMismatch
from mdextended.core.nodes import Element, Text


def test_config_reflects_overrides() -> None:
    """config() exposes the live feature configuration."""
    engine = ExtendedMarkdown({"math": True})

    assert engine.config().enabled("math.inline.enabled")
    assert engine.config().get("toc.tag") == "[TOC]"


def test_invalid_override_raises() -> None:
    """unknown paths and wrong types are rejected at construction."""
    with pytest.raises(InvalidPath):
        ExtendedMarkdown({"no_such_option": True})
    with pytest.raises(TypeMismatch):
        ExtendedMarkdown({"toc": {"levels": "h1"}})


def test_config_changes_apply_to_next_render() -> None:
    """switching a flag after construction affects later renders."""
    engine = ExtendedMarkdown()
    assert "<mark>" in engine.render("==a==")

    engine.config().set("emphasis.mark", False)

    assert engine.render("==a==") == "<p>==a==</p>\n"


def test_rule_gates_follow_config() -> None:
    """base Markdown constructs can be switched off."""
    engine = ExtendedMarkdown({"code": {"inline": False}, "images": False})

    html = engine.render("`x` ![alt](a.png)")

    assert "<code>" not in html
    assert "<img" not in html


def test_raw_html_can_be_disabled() -> None:
    """with raw HTML off, tags are escaped."""
    html = ExtendedMarkdown({"allow_raw_html": False}).render("<b>x</b>")

    assert html == "<p>&lt;b&gt;x&lt;/b&gt;</p>\n"


def test_scan_runs_handlers_only() -> None:
    """scan returns extension nodes without Markdown parsing."""
    assert ExtendedMarkdown().scan("==a== *b*") == [
        Element("mark", children=[Text("a")]),
        Text(" *b*"),
    ]


def test_toc_entries_are_a_copy() -> None:
    """toc_entries cannot mutate engine state."""
    engine = ExtendedMarkdown()
    engine.render("# A\n")

    engine.toc_entries.clear()

    assert len(engine.toc_entries) == 1


def test_contents_list_rejects_unknown_kind() -> None:
    """only string, json and markdown are supported."""
    engine = ExtendedMarkdown()
    engine.render("# A\n")

    with pytest.raises(ValueError):
        engine.contents_list("yaml")


def test_engines_do_not_share_state() -> None:
    """two engines keep separate configuration and ids."""
    first = ExtendedMarkdown()
    second = ExtendedMarkdown({"emphasis": {"mark": False}})

    first.render("# A\n")

    assert second.render("==a==") == "<p>==a==</p>\n"
    assert first.render("==a==") == "<p><mark>a</mark></p>\n"
    assert second.toc_entries == []
