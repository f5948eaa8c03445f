"""Unit tests for pdf_hebrew.text.segment.

Tests cover run reversal, edge punctuation, mixed-language ordering, line
handling, whitespace tokens, styles and sizes, and the GlyphRun helper.
"""

import pytest

from pdf_hebrew.config import Config
from pdf_hebrew.text import LINE_BREAK, Fragment, GlyphRun, normalize_styles, segment_to_fragments
from pdf_hebrew.text.segment import fragments_text, split_lines


def texts(fragments: list[Fragment]) -> list[str]:
    return [f.text for f in fragments]


@pytest.fixture
def segment(config: Config):
    """segment_to_fragments bound to the test fonts at size 10."""

    def _segment(text, style=None):
        return segment_to_fragments(text, 10, style, "HebrewFont", "LatinFont", config=config)

    return _segment


class TestRunReversal:
    """Hebrew runs are emitted in reverse word order."""

    def test_two_hebrew_words(self, segment) -> None:
        result = segment("שלום עולם")
        assert texts(result) == ["עולם", " ", "שלום"]
        assert all(f.direction == "rtl" for f in result)
        assert all(f.font == "HebrewFont" for f in result)

    def test_three_hebrew_words(self, segment) -> None:
        assert texts(segment("אחת שתיים שלוש")) == ["שלוש", " ", "שתיים", " ", "אחת"]

    def test_single_word_has_no_spaces(self, segment) -> None:
        assert texts(segment("שלום")) == ["שלום"]

    def test_mixed_token_stays_whole(self, segment) -> None:
        """A token with any Hebrew letter is one RTL word, never split."""
        result = segment("ABC-123א")
        assert texts(result) == ["ABC-123א"]
        assert result[0].direction == "rtl"


class TestPunctuation:
    """Punctuation at run edges is detached and moved."""

    def test_trailing_period(self, segment) -> None:
        result = segment("שלום עולם.")
        assert texts(result) == ["עולם", " ", "שלום", "."]
        assert result[-1].font == "LatinFont"
        assert result[-1].direction is None

    def test_trailing_cluster(self, segment) -> None:
        assert texts(segment("מה?!")) == ["מה", "?!"]

    def test_leading_parenthesis(self, segment) -> None:
        result = segment("(שלום עולם")
        assert texts(result) == ["(", "עולם", " ", "שלום"]
        assert result[0].font == "LatinFont"

    def test_leading_and_trailing(self, segment) -> None:
        assert texts(segment("-שלום עולם!")) == ["-", "עולם", " ", "שלום", "!"]

    def test_both_edges_of_single_word(self, segment) -> None:
        assert texts(segment("(שלום.")) == ["(", "שלום", "."]

    def test_only_edges_are_touched(self, segment) -> None:
        """Punctuation on inner words stays attached."""
        assert texts(segment("שלום, עולם")) == ["עולם", " ", "שלום,"]

    def test_hebrew_punctuation(self, segment) -> None:
        assert texts(segment("בראשית׃")) == ["בראשית", "׃"]

    def test_punctuation_only_word_is_kept(self, segment) -> None:
        """Stripping that would empty a word leaves the word unmodified."""
        assert texts(segment("שלום ׃")) == ["׃", " ", "שלום"]

    def test_trailing_bracket_not_stripped(self, segment) -> None:
        """Closing brackets are not in the trailing set."""
        assert texts(segment("(שלום)")) == ["(", "שלום)"]


class TestMixedDirection:
    """Latin tokens interleaved with Hebrew runs."""

    def test_hello_shalom_world(self, segment) -> None:
        result = segment("Hello שלום World")
        assert texts(result) == ["Hello ", "שלום", " ", "World "]
        assert [f.direction for f in result] == [None, "rtl", None, None]
        assert [f.font for f in result] == ["LatinFont", "HebrewFont", "LatinFont", "LatinFont"]

    def test_hebrew_before_english_stays_before(self, segment) -> None:
        result = texts(segment("שלום Hello עולם"))
        assert result == ["שלום", " ", "Hello ", "עולם"]
        assert result.index("שלום") < result.index("Hello ") < result.index("עולם")

    def test_run_reversed_between_latin_words(self, segment) -> None:
        assert texts(segment("A שלום עולם B")) == ["A ", "עולם", " ", "שלום", " ", "B "]

    def test_punctuation_with_following_latin(self, segment) -> None:
        assert texts(segment("Hello שלום עולם. World")) == [
            "Hello ",
            "עולם",
            " ",
            "שלום",
            ".",
            " ",
            "World ",
        ]


class TestLatinOnly:
    """Text without Hebrew keeps its order."""

    def test_order_preserved(self, segment) -> None:
        text = "The quick brown fox"
        assert fragments_text(segment(text)) == text + " "

    def test_sanitized_substitutions_only(self, segment) -> None:
        result = segment("one\u2014two \u201Cthree\u201D")
        assert fragments_text(result) == 'one-two "three" '

    def test_no_rtl_fragments(self, segment) -> None:
        assert all(f.direction is None for f in segment("just latin text"))


class TestLines:
    """Explicit line breaks."""

    def test_one_break_between_two_lines(self, segment) -> None:
        result = segment("שורה א\nשורה ב")
        assert texts(result) == ["א", " ", "שורה", LINE_BREAK, "ב", " ", "שורה"]
        assert sum(f.is_line_break for f in result) == 1

    def test_runs_do_not_cross_lines(self, segment) -> None:
        result = texts(segment("אחת\nשתיים"))
        assert result == ["אחת", LINE_BREAK, "שתיים"]

    def test_no_break_after_last_line(self, segment) -> None:
        assert texts(segment("שלום\n")) == ["שלום"]

    def test_blank_middle_line(self, segment) -> None:
        assert texts(segment("a\n\nb")) == ["a ", LINE_BREAK, LINE_BREAK, "b "]

    def test_carriage_return_newlines(self, segment) -> None:
        assert texts(segment("a\r\nb")) == ["a ", LINE_BREAK, "b "]

    def test_line_break_uses_latin_font(self, segment) -> None:
        breaks = [f for f in segment("a\nb") if f.is_line_break]
        assert breaks[0].font == "LatinFont"
        assert breaks[0].size == 10

    def test_split_lines_drops_trailing_empties(self) -> None:
        assert split_lines("a\nb\n\n") == ["a", "b"]


class TestWhitespace:
    """Whitespace tokens other than a single space are kept."""

    def test_single_space_is_a_join(self, segment) -> None:
        assert " " not in texts(segment("a b"))

    def test_double_space_emitted_verbatim(self, segment) -> None:
        assert texts(segment("a  b")) == ["a ", "  ", "b "]

    def test_tab_emitted_verbatim(self, segment) -> None:
        assert texts(segment("a\tb")) == ["a ", "\t", "b "]

    def test_whitespace_inside_run_does_not_flush(self, segment) -> None:
        """The separator is emitted at once; the run is flushed later."""
        assert texts(segment("שלום  עולם")) == ["  ", "עולם", " ", "שלום"]


class TestAttributes:
    """Size and style on every fragment."""

    def test_every_fragment_has_size(self, segment) -> None:
        result = segment("Hello שלום עולם.\nWorld")
        assert {f.size for f in result} == {10}

    def test_single_style_tag(self, segment) -> None:
        result = segment("Hello שלום", style="bold")
        assert all(f.styles == ("bold",) for f in result)

    def test_style_list(self, segment) -> None:
        result = segment("שלום", style=["bold", "italic"])
        assert result[0].styles == ("bold", "italic")

    def test_no_style(self, segment) -> None:
        assert segment("שלום")[0].styles == ()

    def test_config_defaults(self) -> None:
        result = segment_to_fragments("שלום Hi")
        assert result[0].font == "GveretLevinHebrew"
        assert result[-1].font == "Helvetica"
        assert result[0].size == 12

    def test_to_dict(self, segment) -> None:
        data = segment("שלום", style="bold")[0].to_dict()
        assert data == {
            "text": "שלום",
            "font": "HebrewFont",
            "size": 10,
            "direction": "rtl",
            "styles": ["bold"],
        }


class TestEmptyInput:
    @pytest.mark.parametrize("text", [None, "", "\n", "\n\n", "\u200B\u200F"])
    def test_empty_results(self, segment, text) -> None:
        assert segment(text) == []

    def test_invisible_marks_removed_before_segmenting(self, segment) -> None:
        assert texts(segment("שלום\u200F עולם")) == ["עולם", " ", "שלום"]


class TestNormalizeStyles:
    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            (None, ()),
            ("normal", ()),
            ("bold", ("bold",)),
            ("Bold", ("bold",)),
            (["bold", "italic", "bold"], ("bold", "italic")),
            (("italic", "normal"), ("italic",)),
        ],
    )
    def test_normalize(self, style, expected) -> None:
        assert normalize_styles(style) == expected


class TestGlyphRun:
    def test_split_punctuation(self) -> None:
        run = GlyphRun(["[שלום", "עולם:"])
        run.split_punctuation()
        assert run.words == ["שלום", "עולם"]
        assert run.leading_punctuation == "["
        assert run.trailing_punctuation == ":"

    def test_clear_resets_everything(self) -> None:
        run = GlyphRun(["(שלום."])
        run.split_punctuation()
        run.clear()
        assert not run
        assert run.leading_punctuation is None
        assert run.trailing_punctuation is None
