"""List widget - a scrollable list of items with an optional selection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Style
from pane.tui.text import Text, TextLike
from pane.tui.utils import visible_width
from pane.tui.widgets.block import Block


@dataclass
class ListState:
    """Caller-owned list state: the selected index and the first visible item.

    ``offset`` is updated by every render so the selection stays in view.
    """

    selected: int | None = None
    offset: int = 0

    def select(self, index: int | None) -> None:
        self.selected = index
        if index is None:
            self.offset = 0

    def select_next(self, item_count: int) -> None:
        if item_count <= 0:
            self.select(None)
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected + 1, item_count - 1)

    def select_previous(self, item_count: int) -> None:
        if item_count <= 0:
            self.select(None)
        elif self.selected is None:
            self.selected = item_count - 1
        else:
            self.selected = max(self.selected - 1, 0)


class ListItem:
    """One list entry; may span several lines."""

    def __init__(self, content: TextLike, style: Style | None = None) -> None:
        self.content = Text.from_(content)
        self.style = style or Style()

    @property
    def height(self) -> int:
        return self.content.height

    def width(self) -> int:
        return self.content.width()


class List:
    """Render :class:`ListItem` values top to bottom, highlighting the selection."""

    def __init__(
        self,
        items: Iterable[ListItem | TextLike],
        block: Block | None = None,
        style: Style | None = None,
        highlight_style: Style | None = None,
        highlight_symbol: str = "",
        repeat_highlight_symbol: bool = False,
    ) -> None:
        self._items = [i if isinstance(i, ListItem) else ListItem(i) for i in items]
        self._block = block
        self._style = style or Style()
        self._highlight_style = highlight_style or Style()
        self._highlight_symbol = highlight_symbol
        self._repeat_highlight_symbol = repeat_highlight_symbol

    def __len__(self) -> int:
        return len(self._items)

    def _visible_bounds(self, selected: int | None, offset: int, max_height: int) -> tuple[int, int]:
        """Half-open index range of the items to draw, with *selected* inside it."""
        items = self._items
        offset = min(offset, len(items) - 1)
        start = end = offset
        height = 0
        for item in items[offset:]:
            if height + item.height > max_height:
                break
            height += item.height
            end += 1

        target = min(selected if selected is not None else offset, len(items) - 1)
        while target >= end:
            height += items[end].height
            end += 1
            while height > max_height and start < end - 1:
                height -= items[start].height
                start += 1
        while target < start:
            start -= 1
            height += items[start].height
            while height > max_height and end > start + 1:
                end -= 1
                height -= items[end].height
        return start, end

    def render(self, area: Rect, buf: Buffer, state: ListState | None = None) -> None:
        if state is None:
            state = ListState()
        if area.is_empty():
            return
        buf.set_style(area, self._style)
        list_area = area
        if self._block is not None:
            list_area = self._block.inner(area)
            self._block.render(area, buf)
        if list_area.is_empty() or not self._items:
            return

        start, end = self._visible_bounds(state.selected, state.offset, list_area.height)
        state.offset = start

        symbol_width = visible_width(self._highlight_symbol)
        blank_symbol = " " * symbol_width
        reserve_symbol = state.selected is not None and symbol_width > 0

        y = list_area.top
        for index in range(start, end):
            if y >= list_area.bottom:
                break
            item = self._items[index]
            item_area = Rect(list_area.x, y, list_area.width, item.height).intersection(list_area)
            buf.set_style(item_area, item.style)
            is_selected = state.selected == index

            for row, line in enumerate(item.content.lines):
                line_y = y + row
                if line_y >= list_area.bottom:
                    break
                x = list_area.left
                if reserve_symbol:
                    show = is_selected and (row == 0 or self._repeat_highlight_symbol)
                    symbol = self._highlight_symbol if show else blank_symbol
                    x, _ = buf.set_stringn(x, line_y, symbol, list_area.width, item.style)
                buf.set_line(x, line_y, line, list_area.right - x)

            if is_selected:
                buf.set_style(item_area, self._highlight_style)
            y += item.height
