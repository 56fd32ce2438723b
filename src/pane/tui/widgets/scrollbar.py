"""Scrollbar widget - a track with a thumb marking the scroll position.

::

    ▲║║█║║▼     begin, track, thumb, track, end

The position and content length live in a caller-owned
:class:`ScrollbarState`, the same way :class:`~pane.tui.widgets.list.ListState`
keeps a list's selection across frames.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Style


class ScrollDirection(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class ScrollbarOrientation(enum.Enum):
    VERTICAL_RIGHT = "vertical_right"
    VERTICAL_LEFT = "vertical_left"
    HORIZONTAL_BOTTOM = "horizontal_bottom"
    HORIZONTAL_TOP = "horizontal_top"

    @property
    def is_vertical(self) -> bool:
        return self in (ScrollbarOrientation.VERTICAL_RIGHT, ScrollbarOrientation.VERTICAL_LEFT)


@dataclass(frozen=True)
class ScrollbarSymbols:
    track: str
    thumb: str
    begin: str
    end: str


VERTICAL = ScrollbarSymbols("│", "█", "↑", "↓")
HORIZONTAL = ScrollbarSymbols("─", "█", "←", "→")
DOUBLE_VERTICAL = ScrollbarSymbols("║", "█", "▲", "▼")
DOUBLE_HORIZONTAL = ScrollbarSymbols("═", "█", "◄", "►")


@dataclass
class ScrollbarState:
    """Caller-owned scroll state: ``position`` within ``content_length`` items."""

    content_length: int = 0
    position: int = 0

    def __post_init__(self) -> None:
        if self.content_length < 0 or self.position < 0:
            raise ValueError(f"scrollbar state must be non-negative, got {self}")

    def prev(self) -> None:
        self.position = max(self.position - 1, 0)

    def next(self) -> None:
        self.position = min(self.position + 1, max(self.content_length - 1, 0))

    def first(self) -> None:
        self.position = 0

    def last(self) -> None:
        self.position = max(self.content_length - 1, 0)

    def scroll(self, direction: ScrollDirection) -> None:
        if direction is ScrollDirection.FORWARD:
            self.next()
        else:
            self.prev()


# Marks a symbol argument that should come from the orientation's symbol set.
_FROM_SET: Any = object()


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class Scrollbar:
    """Draw a scrollbar along one edge of the area.

    Symbols default to :data:`DOUBLE_VERTICAL` or :data:`DOUBLE_HORIZONTAL`
    depending on *orientation*.  Passing ``None`` for the track, begin or
    end symbol leaves that part out; without begin and end symbols the
    track covers the whole edge.
    """

    def __init__(
        self,
        orientation: ScrollbarOrientation = ScrollbarOrientation.VERTICAL_RIGHT,
        symbols: ScrollbarSymbols | None = None,
        thumb_symbol: str | None = None,
        track_symbol: str | None = _FROM_SET,
        begin_symbol: str | None = _FROM_SET,
        end_symbol: str | None = _FROM_SET,
        style: Style | None = None,
        thumb_style: Style | None = None,
        track_style: Style | None = None,
        begin_style: Style | None = None,
        end_style: Style | None = None,
    ) -> None:
        if symbols is None:
            symbols = DOUBLE_VERTICAL if orientation.is_vertical else DOUBLE_HORIZONTAL
        self._orientation = orientation
        self._thumb_symbol = thumb_symbol if thumb_symbol is not None else symbols.thumb
        self._track_symbol = symbols.track if track_symbol is _FROM_SET else track_symbol
        self._begin_symbol = symbols.begin if begin_symbol is _FROM_SET else begin_symbol
        self._end_symbol = symbols.end if end_symbol is _FROM_SET else end_symbol

        base = style or Style()
        self._thumb_style = thumb_style or base
        self._track_style = track_style or base
        self._begin_style = begin_style or base
        self._end_style = end_style or base

    @property
    def orientation(self) -> ScrollbarOrientation:
        return self._orientation

    def render(self, area: Rect, buf: Buffer, state: ScrollbarState) -> None:
        if area.is_empty():
            return
        vertical = self._orientation.is_vertical
        track = self._track_area(area)
        if vertical:
            start, end = track.top, track.bottom
            if self._orientation is ScrollbarOrientation.VERTICAL_RIGHT:
                axis = track.right - 1
            else:
                axis = track.left
        else:
            start, end = track.left, track.right
            if self._orientation is ScrollbarOrientation.HORIZONTAL_BOTTOM:
                axis = track.bottom - 1
            else:
                axis = track.top
        if end <= start or state.content_length == 0:
            return

        thumb_start, thumb_end = self._thumb_bounds(state, start, end)
        for i in range(start, end):
            if thumb_start <= i < thumb_end:
                self._put(buf, i, axis, self._thumb_symbol, self._thumb_style)
            elif self._track_symbol is not None:
                self._put(buf, i, axis, self._track_symbol, self._track_style)

        if self._begin_symbol is not None:
            self._put(buf, start - 1, axis, self._begin_symbol, self._begin_style)
        if self._end_symbol is not None:
            self._put(buf, end, axis, self._end_symbol, self._end_style)

    def _track_area(self, area: Rect) -> Rect:
        """*area* minus one cell at each end reserved for a begin/end symbol."""
        vertical = self._orientation.is_vertical
        x, y, width, height = area.x, area.y, area.width, area.height
        for symbol, leading in ((self._begin_symbol, True), (self._end_symbol, False)):
            if symbol is None:
                continue
            if vertical:
                y += 1 if leading else 0
                height = max(height - 1, 0)
            else:
                x += 1 if leading else 0
                width = max(width - 1, 0)
        return Rect(x, y, width, height)

    @staticmethod
    def _thumb_bounds(state: ScrollbarState, start: int, end: int) -> tuple[int, int]:
        # The thumb is as long as the visible share of the content (at least
        # one cell) and travels the rest of the track in proportion to the
        # position.
        track_len = end - start
        ratio = min(state.position / state.content_length, 1.0)
        thumb_len = max(_round_half_up(track_len / state.content_length * track_len), 1)
        travel = max(track_len - thumb_len, 0)
        thumb_start = start + _round_half_up(ratio * travel)
        return thumb_start, thumb_start + thumb_len

    def _put(self, buf: Buffer, along: int, axis: int, symbol: str, style: Style) -> None:
        if self._orientation.is_vertical:
            buf.set_string(axis, along, symbol, style)
        else:
            buf.set_string(along, axis, symbol, style)
