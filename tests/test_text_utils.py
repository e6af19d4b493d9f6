"""
Unit tests for the text helpers.
"""

import pytest

from text_utils import (
    contains_cashback_keywords,
    extract_number,
    get_first_word,
    reorder_bidi_text,
    resolve_url,
    unwrap_css_url,
)

KEYWORDS = {"קאשבק"}


class TestContainsCashbackKeywords:
    def test_keyword_in_middle(self):
        assert contains_cashback_keywords("מבצע קאשבק מיוחד", KEYWORDS) is True

    def test_no_keyword(self):
        assert contains_cashback_keywords("regular sale", KEYWORDS) is False

    def test_empty_text(self):
        assert contains_cashback_keywords("", KEYWORDS) is False
        assert contains_cashback_keywords(None, KEYWORDS) is False

    def test_multi_word_keyword(self):
        assert contains_cashback_keywords("קבלו כסף בחזרה היום", {"כסף בחזרה"}) is True

    def test_no_case_folding(self):
        assert contains_cashback_keywords("CASHBACK deal", {"cashback"}) is False


class TestExtractNumber:
    def test_percentage(self):
        assert extract_number("20% הנחה") == 20.0

    def test_no_digits(self):
        assert extract_number("no digits here") is None

    def test_decimal(self):
        assert extract_number("עד 7.5% החזר") == 7.5

    def test_only_first_number(self):
        assert extract_number("10% על קניה מעל 200") == 10.0

    def test_empty(self):
        assert extract_number("") is None


class TestReorderBidiText:
    @pytest.mark.parametrize("word", ["קאשבק", "שלום", "א"])
    def test_single_hebrew_word_is_reversed(self, word):
        assert reorder_bidi_text(word) == word[::-1]
        assert reorder_bidi_text(word, reverse_segments=True) == word[::-1]

    def test_numeric_segment_untouched(self):
        result = reorder_bidi_text("קאשבק 15%")
        assert result.split(" ")[1] == "15%"
        assert result.split(" ")[0] == "קאשבק"[::-1]

    def test_latin_untouched(self):
        assert reorder_bidi_text("ASOS online") == "ASOS online"

    def test_mixed_segment_untouched(self):
        assert reorder_bidi_text("10%קאשבק") == "10%קאשבק"

    def test_pure_hebrew_keeps_order_by_default(self):
        assert reorder_bidi_text("כסף בחזרה") == "ףסכ הרזחב"

    def test_pure_hebrew_reverse_segments(self):
        text = "על כל רכישה באתר"
        assert reorder_bidi_text(text, reverse_segments=True) == text[::-1]

    def test_reverse_segments_ignored_for_mixed_text(self):
        assert reorder_bidi_text("קאשבק 15%", reverse_segments=True) == reorder_bidi_text("קאשבק 15%")

    def test_empty(self):
        assert reorder_bidi_text("") == ""


class TestResolveUrl:
    def test_slashes_collapsed(self):
        assert resolve_url("https://site.co.il/", "/img/logo.png") == "https://site.co.il/img/logo.png"

    def test_no_slashes(self):
        assert resolve_url("https://site.co.il", "img/logo.png") == "https://site.co.il/img/logo.png"

    def test_missing_relative(self):
        assert resolve_url("https://site.co.il", None) is None
        assert resolve_url("https://site.co.il", "") is None

    def test_absolute_relative_is_not_special_cased(self):
        assert resolve_url("https://a.com", "https://b.com/x") == "https://a.com/https://b.com/x"


class TestGetFirstWord:
    def test_space(self):
        assert get_first_word("  קאשבק 10% על הכל ") == "קאשבק"

    @pytest.mark.parametrize("text", ["קאשבק-10%", "קאשבק_10", "קאשבק.10", "קאשבק,10",
                                      "קאשבק;10", "קאשבק:10", "קאשבק|10", "קאשבק!10"])
    def test_delimiters(self, text):
        assert get_first_word(text) == "קאשבק"

    def test_skips_leading_delimiter(self):
        assert get_first_word("- קאשבק") == "קאשבק"

    def test_empty(self):
        assert get_first_word("") == ""

    def test_custom_delimiters(self):
        assert get_first_word("a/b c", delimiters=r"[/]") == "a"


class TestUnwrapCssUrl:
    @pytest.mark.parametrize("value", ["url('/a.png')", 'url("/a.png")', "url(/a.png)", " url( '/a.png' ) "])
    def test_unwrap(self, value):
        assert unwrap_css_url(value) == "/a.png"

    def test_none(self):
        assert unwrap_css_url("none") is None
        assert unwrap_css_url(None) is None


def test_trailing_newline_is_not_hebrew_only():
    assert reorder_bidi_text("שלום\n") == "שלום\n"
    assert reorder_bidi_text("שלום\n", reverse_segments=True) == "שלום\n"


def test_layered_background_uses_first_url():
    assert unwrap_css_url("url('/a.png'), url('/b.png')") == "/a.png"
    assert unwrap_css_url("url(/a.png), linear-gradient(red, blue)") == "/a.png"
