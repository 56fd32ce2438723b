"""Paragraph widget - styled text with alignment, wrapping and scrolling."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Style
from pane.tui.text import Alignment, StyledGrapheme, Text, TextLike
from pane.tui.utils import is_whitespace_char
from pane.tui.widgets.block import Block


@dataclass(frozen=True)
class Wrap:
    """Enable word wrapping.  ``trim`` drops whitespace at wrapped line starts and ends."""

    trim: bool = True


def _tokens(graphemes: list[StyledGrapheme]) -> Iterator[tuple[bool, list[StyledGrapheme]]]:
    """Split into alternating runs of whitespace and non-whitespace graphemes."""
    run: list[StyledGrapheme] = []
    run_is_space = False
    for g in graphemes:
        is_space = is_whitespace_char(g.symbol)
        if run and is_space != run_is_space:
            yield run_is_space, run
            run = []
        run.append(g)
        run_is_space = is_space
    if run:
        yield run_is_space, run


def _rstrip(line: list[StyledGrapheme]) -> list[StyledGrapheme]:
    end = len(line)
    while end > 0 and is_whitespace_char(line[end - 1].symbol):
        end -= 1
    return line[:end]


def wrap_graphemes(
    graphemes: list[StyledGrapheme], width: int, trim: bool = True
) -> list[list[StyledGrapheme]]:
    """Greedy word wrap of one line of styled graphemes to *width* columns.

    Words longer than *width* are broken at grapheme boundaries.  An empty
    input yields one empty line.
    """
    if width <= 0:
        return []
    lines: list[list[StyledGrapheme]] = []
    line: list[StyledGrapheme] = []
    line_width = 0

    for is_space, token in _tokens(graphemes):
        token_width = sum(g.width for g in token)
        if line and line_width + token_width > width:
            lines.append(_rstrip(line) if trim else line)
            line, line_width = [], 0
        if is_space and trim and not line and lines:
            continue
        for g in token:
            if g.width > width:
                continue
            if line and line_width + g.width > width:
                lines.append(line)
                line, line_width = [], 0
            line.append(g)
            line_width += g.width

    lines.append(_rstrip(line) if trim else line)
    return lines


def _take_columns(
    graphemes: list[StyledGrapheme], skip: int, width: int
) -> list[StyledGrapheme]:
    """Graphemes between columns ``skip`` and ``skip + width``."""
    result: list[StyledGrapheme] = []
    col = 0
    used = 0
    for g in graphemes:
        start = col
        col += g.width
        if start < skip:
            continue
        if used + g.width > width:
            break
        result.append(g)
        used += g.width
    return result


class Paragraph:
    """Paragraph widget - renders :class:`~pane.tui.text.Text` inside an area."""

    def __init__(
        self,
        text: TextLike = "",
        block: Block | None = None,
        style: Style | None = None,
        wrap: Wrap | None = None,
        alignment: Alignment = Alignment.LEFT,
        scroll: tuple[int, int] = (0, 0),
    ) -> None:
        self._text = Text.from_(text)
        self._block = block
        self._style = style or Style()
        self._wrap = wrap
        self._alignment = alignment
        self._scroll = scroll

    def scroll(self, y: int, x: int = 0) -> Paragraph:
        """Skip the first *y* rendered lines (and *x* columns when not wrapping)."""
        self._scroll = (y, x)
        return self

    def _lines(self, width: int) -> list[tuple[list[StyledGrapheme], Alignment]]:
        out: list[tuple[list[StyledGrapheme], Alignment]] = []
        for line in self._text.lines:
            alignment = line.alignment or self._text.alignment or self._alignment
            graphemes = list(line.styled_graphemes(self._style))
            if self._wrap is not None:
                for wrapped in wrap_graphemes(graphemes, width, self._wrap.trim):
                    out.append((wrapped, alignment))
            else:
                out.append((_take_columns(graphemes, self._scroll[1], width), alignment))
        return out

    def line_count(self, width: int) -> int:
        """Number of rows the text occupies at *width*, excluding any block."""
        return len(self._lines(width))

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self._style)
        text_area = area
        if self._block is not None:
            text_area = self._block.inner(area)
            self._block.render(area, buf)
        if text_area.is_empty():
            return

        lines = self._lines(text_area.width)[self._scroll[0]:]
        for y, (graphemes, alignment) in zip(range(text_area.top, text_area.bottom), lines):
            line_width = sum(g.width for g in graphemes)
            if alignment is Alignment.CENTER:
                x = text_area.left + (text_area.width - line_width) // 2
            elif alignment is Alignment.RIGHT:
                x = text_area.right - line_width
            else:
                x = text_area.left
            for g in graphemes:
                buf.set_string(x, y, g.symbol, g.style)
                x += g.width
