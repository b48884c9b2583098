"""tests for typographer and smartypants handlers."""

from typing import Optional

from mdextended.core.config import FeatureConfig
from mdextended.core.nodes import Text
from mdextended.extensions import Excerpt, registry


def _excerpt(text: str, before: str = "") -> Excerpt:
    return Excerpt(text=text, before=before, context=before + text, offset=len(before))


def _typographer(text: str, config: Optional[FeatureConfig] = None) -> Optional[tuple[str, int]]:
    result = registry.get("typographer").match(
        _excerpt(text), config or FeatureConfig({"typographer": True})
    )
    if result is None:
        return None
    assert isinstance(result.node, Text)
    return result.node.text, result.extent


def _smart(text: str, before: str = "", config: Optional[FeatureConfig] = None) -> Optional[tuple[str, int]]:
    result = registry.get("smartypants").match(
        _excerpt(text, before), config or FeatureConfig({"smartypants": True})
    )
    if result is None:
        return None
    assert isinstance(result.node, Text)
    return result.node.text, result.extent


def test_typographer_symbols() -> None:
    """(c), (r), (tm) and (p) become symbols, case-insensitively."""
    assert _typographer("(c) 2024") == ("©", 3)
    assert _typographer("(R)") == ("®", 3)
    assert _typographer("(TM)") == ("™", 4)
    assert _typographer("(p)") == ("¶", 3)
    assert _typographer("(x)") is None


def test_typographer_plus_minus() -> None:
    """+- becomes the plus-minus sign."""
    assert _typographer("+-3") == ("±", 2)
    assert _typographer("+3") is None


def test_typographer_shortens_trailing_dots() -> None:
    """!... and ?... collapse to two dots."""
    assert _typographer("!....") == ("!..", 5)
    assert _typographer("?...") == ("?..", 4)
    assert _typographer("!.") is None


def test_typographer_normalizes_dot_runs() -> None:
    """runs of two or more dots become an ellipsis."""
    assert _typographer("....") == ("...", 4)
    assert _typographer(". ") is None


def test_typographer_uses_smartypants_ellipsis_when_enabled() -> None:
    """the smartypants ellipsis substitution wins when smart ellipses are on."""
    config = FeatureConfig({"typographer": True, "smartypants": True})

    assert _typographer("..", config) == ("…", 2)


def test_smart_double_quotes() -> None:
    """double quotes open after whitespace and close after text."""
    assert _smart('"hi"', " ") == ("“", 1)
    assert _smart('" rest', "i") == ("”", 1)
    assert _smart('"', " ") is None


def test_smart_single_quotes_and_apostrophes() -> None:
    """single quotes pair up; a quote after a letter is an apostrophe."""
    assert _smart("'hi'", "") == ("‘", 1)
    assert _smart("'t", "n") == ("’", 1)


def test_smart_backticks() -> None:
    """``text'' becomes curly double quotes."""
    assert _smart("``hi''", " ") == ("“", 2)
    assert _smart("'' after", "i") == ("”", 2)
    assert _smart("``code``", " ") is None


def test_smart_angled_quotes() -> None:
    """<<text>> becomes guillemets."""
    assert _smart("<<hi>>", "") == ("«", 2)
    assert _smart(">>", "i") == ("»", 2)
    assert _smart("<a>", "") is None


def test_smart_dashes() -> None:
    """--- is an em dash and -- an en dash."""
    assert _smart("---", "a") == ("—", 3)
    assert _smart("--", "a") == ("–", 2)
    assert _smart("-", "a") is None


def test_smart_ellipses_need_exactly_three_dots() -> None:
    """only a run of exactly three dots is educated."""
    assert _smart("...", "a") == ("…", 3)
    assert _smart("....", "a") is None


def test_smart_sub_flags_gate_each_rule() -> None:
    """turning off a smart_* flag disables that substitution."""
    config = FeatureConfig({"smartypants": {"enabled": True, "smart_dashes": False}})

    assert _smart("--", "a", config) is None
    assert _smart("...", "a", config) == ("…", 3)


def test_smart_substitutions_are_configurable() -> None:
    """substitution entities are decoded from configuration."""
    config = FeatureConfig(
        {"smartypants": {"enabled": True, "substitutions": {"mdash": "&#8212;&#8212;"}}}
    )

    assert _smart("---", "a", config) == ("——", 3)
