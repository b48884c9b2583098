"""tests for extension markers rendered through the full pipeline."""

from mdextended import ExtendedMarkdown


def test_mark_and_insertion_render() -> None:
    """==text== and ++text++ render as mark and ins."""
    html = ExtendedMarkdown().render("==hi== and ++new++")

    assert html == "<p><mark>hi</mark> and <ins>new</ins></p>\n"


def test_nested_markers_render() -> None:
    """markers inside a match are parsed as inline content."""
    html = ExtendedMarkdown().render("==a ++b++ *c*==")

    assert html == "<p><mark>a <ins>b</ins> <em>c</em></mark></p>\n"


def test_keystrokes_render_literal_content() -> None:
    """[[key]] renders as kbd with its text untouched."""
    html = ExtendedMarkdown().render("Press [[Ctrl]] + [[*]]")

    assert html == "<p>Press <kbd>Ctrl</kbd> + <kbd>*</kbd></p>\n"


def test_superscript_and_subscript_are_opt_in() -> None:
    """^ and ~ only render once switched on."""
    source = "x^2^ H~2~O"
    enabled = ExtendedMarkdown(
        {"emphasis": {"superscript": True, "subscript": True}}
    ).render(source)

    assert ExtendedMarkdown().render(source) == "<p>x^2^ H~2~O</p>\n"
    assert enabled == "<p>x<sup>2</sup> H<sub>2</sub>O</p>\n"


def test_strikethrough_survives_subscript() -> None:
    """~~text~~ is still strikethrough with subscript on."""
    html = ExtendedMarkdown({"emphasis": {"subscript": True}}).render("~~gone~~")

    assert html == "<p><s>gone</s></p>\n"


def test_disabled_marker_renders_literally() -> None:
    """a switched-off handler leaves its markers in the output."""
    html = ExtendedMarkdown({"emphasis": {"mark": False}}).render("==hi==")

    assert html == "<p>==hi==</p>\n"


def test_disabled_branch_disables_children() -> None:
    """turning off emphasis turns off every emphasis flag."""
    html = ExtendedMarkdown({"emphasis": False}).render("==x== **b** *i*")

    assert html == "<p>==x== **b** *i*</p>\n"


def test_bold_can_be_disabled_alone() -> None:
    """with bold off, ** stays literal while italics still render."""
    html = ExtendedMarkdown({"emphasis": {"bold": False}}).render("**b** *i*")

    assert html == "<p>**b** <em>i</em></p>\n"


def test_escaped_marker_is_literal() -> None:
    """a backslash keeps a marker from opening."""
    html = ExtendedMarkdown().render("\\==x==")

    assert html == "<p>==x==</p>\n"


def test_inline_math_kept_verbatim() -> None:
    """inline math keeps its delimiters for client-side rendering."""
    html = ExtendedMarkdown({"math": True}).render("Area $a^2 * b$ here")

    assert html == "<p>Area $a^2 * b$ here</p>\n"


def test_escaped_math_delimiter_keeps_backslash() -> None:
    """\\( opens math when math is on, so its backslash survives."""
    html = ExtendedMarkdown({"math": True}).render("see \\(x\\)")

    assert html == "<p>see \\(x\\)</p>\n"


def test_typographer_symbols_render() -> None:
    """typographer replacements apply when switched on."""
    html = ExtendedMarkdown({"typographer": True}).render("(c) 2024 +- 1")

    assert html == "<p>© 2024 ± 1</p>\n"


def test_typographer_on_by_default() -> None:
    """symbol replacement needs no configuration."""
    assert ExtendedMarkdown().render("(c) text\n") == "<p>© text</p>\n"


def test_smartypants_educates_text() -> None:
    """quotes, dashes and ellipses are educated when switched on."""
    html = ExtendedMarkdown({"smartypants": True}).render('He said "hi" -- ok...')

    assert html == "<p>He said “hi” – ok…</p>\n"


def test_render_inline_skips_paragraphs() -> None:
    """render_inline emits no block wrapper."""
    assert ExtendedMarkdown().render_inline("==a==") == "<mark>a</mark>"
