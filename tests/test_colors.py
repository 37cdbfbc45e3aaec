import pytest

from schemesync.colors import StyleFlag, is_hex_color, to_display, to_source


def test_display_and_source_forms():
    assert to_display("aabbcc") == "#AABBCC"
    assert to_display("#aAbBcC") == "#AABBCC"
    assert to_source("#AABBCC") == "aabbcc"
    assert to_source("aabbcc") == "aabbcc"


def test_short_values_are_zero_padded():
    assert to_display("ff") == "#0000FF"
    assert to_source("#1234") == "001234"


@pytest.mark.parametrize("value", ["", "#", "xyz", "1234567", "#12345g", None])
def test_invalid_colors(value):
    assert not is_hex_color(value)
    with pytest.raises(ValueError):
        to_display(value)


@pytest.mark.parametrize("flag, keywords", [
    (StyleFlag.NORMAL, ""),
    (StyleFlag.BOLD, "bold"),
    (StyleFlag.ITALIC, "italic"),
    (StyleFlag.BOLD_ITALIC, "bold italic"),
])
def test_style_flag_keywords(flag, keywords):
    assert flag.keywords == keywords
    assert StyleFlag.from_keywords(keywords) is flag


def test_style_flag_keyword_order_does_not_matter():
    assert StyleFlag.from_keywords("italic bold") is StyleFlag.BOLD_ITALIC
    assert StyleFlag.from_keywords(None) is StyleFlag.NORMAL


def test_style_flag_rejects_unknown_words():
    with pytest.raises(ValueError):
        StyleFlag.from_keywords("bold underline")


def test_style_flag_from_code():
    assert StyleFlag.from_code("3") is StyleFlag.BOLD_ITALIC
    assert StyleFlag.from_code("1") is StyleFlag.BOLD
    assert StyleFlag.from_code("7") is StyleFlag.NORMAL
    assert StyleFlag.from_code("x") is StyleFlag.NORMAL
