"""tests for FeatureConfig."""

import pytest

from mdextended.core.config import FeatureConfig
from mdextended.core.errors import InvalidPath, TypeMismatch


def test_get_reads_defaults() -> None:
    """get returns compiled defaults for a fresh config."""
    config = FeatureConfig()

    assert config.get("emphasis.mark") is True
    assert config.get("emphasis.subscript") is False
    assert config.get("toc.tag") == "[TOC]"


def test_get_branch_reads_enabled_flag() -> None:
    """a branch path resolves to its .enabled flag."""
    config = FeatureConfig()

    assert config.get("math") is False
    assert config.get("alerts") is True


def test_document_level_defaults() -> None:
    """typographer, comments and abbreviations start on; the TOC spans h1 to h6."""
    config = FeatureConfig()

    assert config.get("typographer") is True
    assert config.get("comments") is True
    assert config.get("abbreviations") is True
    assert config.get("abbreviations.allow_custom") is True
    assert config.get("abbreviations.predefined") == {}
    assert config.get("toc.levels") == ["h1", "h2", "h3", "h4", "h5", "h6"]


def test_get_unknown_path_raises() -> None:
    """unknown paths raise InvalidPath naming the path."""
    config = FeatureConfig()

    with pytest.raises(InvalidPath) as exc_info:
        config.get("emphasis.blink")
    assert exc_info.value.path == "emphasis.blink"


def test_set_boolean_toggles_bit() -> None:
    """writing a boolean sets and clears its bit."""
    config = FeatureConfig()

    config.set("emphasis.mark", False)
    assert config.get("emphasis.mark") is False

    config.set("emphasis.mark", True)
    assert config.get("emphasis.mark") is True


def test_set_returns_config_for_chaining() -> None:
    """set returns the same config."""
    config = FeatureConfig()

    assert config.set("typographer", True).set("quotes", False) is config


def test_set_mapping_expands_nested_paths() -> None:
    """a nested mapping is expanded into individual paths."""
    config = FeatureConfig()

    config.set({"math": {"enabled": True, "inline": False}})

    assert config.get("math.enabled") is True
    assert config.get("math.inline.enabled") is False


def test_set_mapping_on_payload_leaf_is_stored_verbatim() -> None:
    """a mapping written to a dict payload replaces it instead of expanding."""
    config = FeatureConfig()

    config.set("headings.auto_anchors.replacements", {"&": "and"})

    assert config.get("headings.auto_anchors.replacements") == {"&": "and"}


def test_set_type_mismatch_raises() -> None:
    """values of the wrong type raise TypeMismatch."""
    config = FeatureConfig()

    with pytest.raises(TypeMismatch):
        config.set("emphasis.mark", "yes")
    with pytest.raises(TypeMismatch):
        config.set("toc.levels", "h1")
    with pytest.raises(TypeMismatch):
        config.set("toc.tag", 1)


def test_set_unknown_path_raises() -> None:
    """set with an unknown path raises InvalidPath."""
    config = FeatureConfig()

    with pytest.raises(InvalidPath):
        config.set({"nope": True})


def test_enabled_requires_every_enclosing_branch() -> None:
    """a flag reads as disabled when any enclosing branch is off."""
    config = FeatureConfig()
    assert config.enabled("emphasis.mark") is True

    config.set("emphasis", False)

    assert config.get("emphasis.mark") is True
    assert config.enabled("emphasis.mark") is False


def test_overrides_applied_at_construction() -> None:
    """constructor overrides are written through set."""
    config = FeatureConfig({"smartypants": True, "toc": {"id": "contents"}})

    assert config.get("smartypants") is True
    assert config.get("toc.id") == "contents"


def test_payload_defaults_are_not_shared() -> None:
    """mutating one instance's payload leaves others untouched."""
    first = FeatureConfig()
    second = FeatureConfig()

    first.get("alerts.types").append("danger")

    assert "danger" not in second.get("alerts.types")


def test_export_flattens_state() -> None:
    """export returns every path with its current value."""
    config = FeatureConfig({"typographer": True})

    exported = config.export()

    assert exported["typographer"] is True
    assert exported["toc.id"] == "toc"
    assert "emphasis.enabled" in exported


def test_normalise_path_resolves_branches() -> None:
    """normalise_path maps a branch to its flag and leaves leaves alone."""
    config = FeatureConfig()

    assert config.normalise_path("tables") == "tables.enabled"
    assert config.normalise_path("tables.tablespan") == "tables.tablespan"
