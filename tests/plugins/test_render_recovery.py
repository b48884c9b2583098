"""tests that malformed input renders instead of raising."""

import random

from mdextended import ExtendedMarkdown

ALL_FEATURES = {
    "math": True,
    "smartypants": True,
    "diagrams": True,
    "emphasis": {"superscript": True, "subscript": True},
}

ALPHABET = "\\$()[]^~=+<>\"'`.-!?*_#>|{}:" + "abcXYZ    \n\n"


def test_unterminated_math_block_keeps_collected_lines() -> None:
    """a $$ block without a closer ends at the end of input."""
    html = ExtendedMarkdown({"math": True}).render("$$\nx\ny")

    assert html == "$$\nx\ny\n"


def test_unterminated_alert_closes_at_end_of_input() -> None:
    """an alert running to the end of the document is still closed."""
    html = ExtendedMarkdown().render("> [!NOTE]\n> body")

    assert "<p>body</p>\n</div>" in html


def test_blockquote_without_space_is_not_an_alert() -> None:
    """>[!NOTE] stays an ordinary blockquote."""
    html = ExtendedMarkdown().render(">[!NOTE]\n> x\n")

    assert html.startswith("<blockquote>")
    assert "markdown-alert" not in html


def test_unmatched_inline_markers_stay_literal() -> None:
    """markers without a partner are emitted as text."""
    engine = ExtendedMarkdown(
        {"math": True, "emphasis": {"superscript": True, "subscript": True}}
    )

    assert engine.render("==a ++b ^c ~d $e\n") == "<p>==a ++b ^c ~d $e</p>\n"


def test_random_input_never_raises() -> None:
    """arbitrary marker soup renders, renders inline and scans."""
    rng = random.Random(1234)
    engine = ExtendedMarkdown(ALL_FEATURES)

    for _ in range(500):
        text = "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 40)))

        assert isinstance(engine.render(text), str)
        assert isinstance(engine.render_inline(text), str)
        assert isinstance(engine.scan(text), list)
