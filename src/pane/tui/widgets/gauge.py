"""Gauge widget - a horizontal progress bar with a centered label."""

from __future__ import annotations

import math

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Color, Style
from pane.tui.text import Span
from pane.tui.widgets.block import Block

_FULL_BLOCK = "█"
# Eighths of a cell, index 0 is empty.
_PARTIAL_BLOCKS = ("", "▏", "▎", "▍", "▌", "▋", "▊", "▉")


class Gauge:
    """Fill ``ratio`` of the area with ``gauge_style``.

    The filled part swaps the gauge's foreground and background, so a label
    drawn over it stays readable.  With ``use_unicode`` the bar is drawn
    with block characters and the boundary cell shows eighths.
    """

    def __init__(
        self,
        ratio: float = 0.0,
        percent: int | None = None,
        label: str | Span | None = None,
        block: Block | None = None,
        style: Style | None = None,
        gauge_style: Style | None = None,
        use_unicode: bool = False,
    ) -> None:
        if percent is not None:
            if not 0 <= percent <= 100:
                raise ValueError(f"percent must be between 0 and 100, got {percent}")
            ratio = percent / 100
        if not 0.0 <= ratio <= 1.0:
            raise ValueError(f"ratio must be between 0.0 and 1.0, got {ratio}")
        self._ratio = ratio
        self._label = label
        self._block = block
        self._style = style or Style()
        self._gauge_style = gauge_style or Style()
        self._use_unicode = use_unicode

    @property
    def ratio(self) -> float:
        return self._ratio

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self._style)
        gauge_area = area
        if self._block is not None:
            gauge_area = self._block.inner(area)
            self._block.render(area, buf)
        if gauge_area.is_empty():
            return
        buf.set_style(gauge_area, self._gauge_style)

        label = self._label
        if label is None:
            label = f"{round(self._ratio * 100)}%"
        span = label if isinstance(label, Span) else Span(label)
        label_width = min(span.width(), gauge_area.width)
        label_x = gauge_area.left + (gauge_area.width - label_width) // 2
        label_y = gauge_area.top + (gauge_area.height - 1) // 2

        filled = gauge_area.width * self._ratio
        end = gauge_area.left + math.floor(filled)
        if not self._use_unicode:
            end = gauge_area.left + round(filled)
        fg = self._gauge_style.fg or Color.RESET
        bg = self._gauge_style.bg or Color.RESET

        for y in range(gauge_area.top, gauge_area.bottom):
            for x in range(gauge_area.left, end):
                cell = buf.get(x, y).copy()
                in_label = y == label_y and label_x <= x < label_x + label_width
                if self._use_unicode and not in_label:
                    cell.set_symbol(_FULL_BLOCK).set_fg(fg)
                else:
                    cell.set_symbol(" ").set_fg(bg).set_bg(fg)
                buf.set(x, y, cell)
            if self._use_unicode and end < gauge_area.right:
                eighths = math.floor((filled - math.floor(filled)) * 8)
                if eighths:
                    cell = buf.get(end, y).copy()
                    buf.set(end, y, cell.set_symbol(_PARTIAL_BLOCKS[eighths]).set_fg(fg))

        buf.set_span(label_x, label_y, span, label_width)
