"""Tests for pane.tui.text -- spans, lines and text blocks."""

from __future__ import annotations

import pytest

from pane.tui.style import Color, Modifier, Style
from pane.tui.text import Alignment, Line, Masked, Span, StyledGrapheme, Text


class TestSpan:
    def test_width_counts_columns(self) -> None:
        assert Span("a世").width() == 3

    def test_patch_style(self) -> None:
        span = Span("x", Style(fg=Color.RED)).patch_style(Style(bg=Color.BLUE))
        assert span.style == Style(fg=Color.RED, bg=Color.BLUE)

    def test_styled_graphemes_patch_base_style(self) -> None:
        base = Style(bg=Color.BLUE)
        (g,) = Span("x", Style(fg=Color.RED)).styled_graphemes(base)
        assert g == StyledGrapheme("x", Style(fg=Color.RED, bg=Color.BLUE))

    def test_styled_graphemes_drop_escapes_and_newlines(self) -> None:
        symbols = [g.symbol for g in Span("\x1b[1ma\nb").styled_graphemes(Style())]
        assert symbols == ["a", "b"]


class TestLine:
    def test_from_string(self) -> None:
        assert Line.from_("ab") == Line((Span("ab"),))

    def test_from_mixed_list(self) -> None:
        line = Line.from_(["a", Span("b", Style().bold())])
        assert line.width() == 2
        assert line.spans[1].style.add_modifier == Modifier.BOLD
        assert line.plain() == "ab"

    def test_aligned(self) -> None:
        assert Line.raw("a").aligned(Alignment.RIGHT).alignment is Alignment.RIGHT

    def test_patch_style_keeps_span_styles(self) -> None:
        line = Line.from_([Span("a", Style(fg=Color.RED)), "b"]).patch_style(Style(fg=Color.GREEN))
        assert [s.style.fg for s in line.spans] == [Color.GREEN, Color.GREEN]

    def test_styled(self) -> None:
        line = Line.styled("x", Style().italic())
        assert line.spans[0].style.add_modifier == Modifier.ITALIC


class TestText:
    def test_from_string_splits_lines(self) -> None:
        text = Text.from_("ab\ncde")
        assert text.height == 2
        assert text.width() == 3

    def test_from_list_of_lines(self) -> None:
        text = Text.from_(["a", Line.raw("bc"), [Span("d"), Span("e")]])
        assert [line.plain() for line in text.lines] == ["a", "bc", "de"]

    def test_from_span(self) -> None:
        assert Text.from_(Span("x")).height == 1

    def test_empty(self) -> None:
        assert Text().height == 0
        assert Text().width() == 0

    def test_styled(self) -> None:
        text = Text.styled("a\nb", Style(fg=Color.CYAN))
        assert all(line.spans[0].style.fg is Color.CYAN for line in text.lines)


class TestMasked:
    def test_value_hides_every_grapheme(self) -> None:
        masked = Masked("12345", "x")
        assert masked.value == "xxxxx"
        assert str(masked) == "xxxxx"

    def test_default_mask(self) -> None:
        assert Masked("ab").value == "**"

    def test_one_mask_per_grapheme(self) -> None:
        assert Masked("e\u0301a").value == "**"

    def test_repr_does_not_leak_the_value(self) -> None:
        assert "secret" not in repr(Masked("secret"))

    def test_into_text(self) -> None:
        text = Text.from_(Masked("123", "#"))
        assert text.lines == (Line.raw("###"),)

    def test_inner_is_kept(self) -> None:
        assert Masked("pw").inner == "pw"

    def test_invalid_mask_char(self) -> None:
        with pytest.raises(ValueError):
            Masked("pw", "ab")
        with pytest.raises(ValueError):
            Masked("pw", "世")
