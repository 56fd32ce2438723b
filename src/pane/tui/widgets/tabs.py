"""Tabs widget - a one-line bar of titles with the selected one highlighted."""

from __future__ import annotations

from collections.abc import Iterable

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Style
from pane.tui.text import Line, LineLike, Span
from pane.tui.widgets.block import Block


class Tabs:
    def __init__(
        self,
        titles: Iterable[LineLike],
        selected: int = 0,
        block: Block | None = None,
        style: Style | None = None,
        highlight_style: Style | None = None,
        divider: str | Span = "|",
        padding_left: str = " ",
        padding_right: str = " ",
    ) -> None:
        self._titles = [Line.from_(t) for t in titles]
        self._selected = selected
        self._block = block
        self._style = style or Style()
        self._highlight_style = highlight_style if highlight_style is not None else Style().reversed()
        self._divider = divider if isinstance(divider, Span) else Span(divider)
        self._padding_left = padding_left
        self._padding_right = padding_right

    def select(self, index: int) -> Tabs:
        self._selected = index
        return self

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self._style)
        tabs_area = area
        if self._block is not None:
            tabs_area = self._block.inner(area)
            self._block.render(area, buf)
        if tabs_area.is_empty():
            return

        x = tabs_area.left
        y = tabs_area.top
        right = tabs_area.right
        last = len(self._titles) - 1
        for i, title in enumerate(self._titles):
            if x >= right:
                break
            x, _ = buf.set_stringn(x, y, self._padding_left, right - x)
            if x >= right:
                break
            start = x
            x, _ = buf.set_line(x, y, title, right - x)
            if i == self._selected:
                buf.set_style(Rect(start, y, x - start, 1), self._highlight_style)
            x, _ = buf.set_stringn(x, y, self._padding_right, right - x)
            if i == last or x >= right:
                break
            x, _ = buf.set_span(x, y, self._divider, right - x)
