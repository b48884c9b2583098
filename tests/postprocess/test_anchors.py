"""tests for anchor id generation."""

from mdextended.core.config import FeatureConfig
from mdextended.postprocess.anchors import AnchorIdGenerator, AnchorRegistry, sanitize
from mdextended.postprocess.transliterate import transliterate


def test_sanitize_collapses_separators() -> None:
    """runs of punctuation and spaces become one delimiter, trimmed at the ends."""
    assert sanitize("  Hello,  World!  ", "-") == "Hello-World"
    assert sanitize("a__b", "_") == "a_b"


def test_registry_suffixes_duplicates() -> None:
    """repeated bases get increasing numeric suffixes."""
    anchors = AnchorRegistry()

    assert anchors.uniquify("title") == "title"
    assert anchors.uniquify("title") == "title-1"
    assert anchors.uniquify("title") == "title-2"


def test_registry_skips_taken_and_blacklisted_ids() -> None:
    """suffixes skip ids that are blacklisted or already issued."""
    anchors = AnchorRegistry()

    assert anchors.uniquify("toc", blacklist=["toc"]) == "toc-1"
    assert anchors.uniquify("a-1") == "a-1"
    assert anchors.uniquify("a") == "a"
    assert anchors.uniquify("a") == "a-2"


def test_registry_reset_forgets_ids() -> None:
    """reset starts a fresh document."""
    anchors = AnchorRegistry()
    anchors.uniquify("x")
    anchors.reset()

    assert anchors.uniquify("x") == "x"


def test_generator_lowercases_and_dedupes() -> None:
    """identical heading text yields title then title-1."""
    generator = AnchorIdGenerator(FeatureConfig())

    assert generator.create("Title") == "title"
    assert generator.create("Title") == "title-1"


def test_generator_applies_replacements_and_delimiter() -> None:
    """configured replacements run before sanitizing."""
    config = FeatureConfig(
        {"headings": {"auto_anchors": {"delimiter": "_", "replacements": {"&": "and"}}}}
    )

    assert AnchorIdGenerator(config).create("Q&A Time") == "qanda_time"


def test_generator_transliterates_when_enabled() -> None:
    """transliteration maps accented letters to ASCII."""
    plain = AnchorIdGenerator(FeatureConfig())
    ascii_only = AnchorIdGenerator(
        FeatureConfig({"headings": {"auto_anchors": {"transliterate": True}}})
    )

    assert plain.create("Čeština Ünïcode") == "čeština-ünïcode"
    assert ascii_only.create("Čeština Ünïcode") == "cestina-unicode"


def test_generator_returns_none_for_empty_base() -> None:
    """headings with no word characters get no id."""
    assert AnchorIdGenerator(FeatureConfig()).create("!!!") is None


def test_generator_disabled_returns_none() -> None:
    """auto anchors can be switched off."""
    config = FeatureConfig({"headings": {"auto_anchors": False}})

    assert AnchorIdGenerator(config).create("Title") is None


def test_callback_replaces_pipeline() -> None:
    """a registered callback decides the id on its own."""
    generator = AnchorIdGenerator(FeatureConfig({"headings": {"auto_anchors": False}}))
    generator.callback = lambda text, config: f"custom-{len(text)}"

    assert generator.create("Title") == "custom-5"


def test_transliterate_falls_back_to_decomposition() -> None:
    """unmapped accented characters lose their combining marks."""
    assert transliterate("Ελλάδα") == "Ellada"
    assert transliterate("Ŕ") == "R"
    assert transliterate("Щука") == "Shuka"
