"""Clear widget - blanks an area, typically before drawing a popup over it."""

from __future__ import annotations

from pane.tui.buffer import Buffer, Cell
from pane.tui.geometry import Rect


class Clear:
    """Reset every cell of the area to a default blank cell."""

    def render(self, area: Rect, buf: Buffer) -> None:
        clipped = area.intersection(buf.area)
        for pos in clipped.positions():
            buf.set(pos.x, pos.y, Cell())
