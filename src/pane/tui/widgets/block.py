"""Block widget - borders, titles and padding around other widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect
from pane.tui.style import Style
from pane.tui.text import Alignment, Line, LineLike, Span


class Borders(enum.Flag):
    TOP = enum.auto()
    RIGHT = enum.auto()
    BOTTOM = enum.auto()
    LEFT = enum.auto()


NO_BORDERS = Borders(0)
ALL_BORDERS = Borders.TOP | Borders.RIGHT | Borders.BOTTOM | Borders.LEFT


@dataclass(frozen=True)
class BorderSet:
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    vertical: str
    horizontal: str


class BorderType(enum.Enum):
    PLAIN = BorderSet("┌", "┐", "└", "┘", "│", "─")
    ROUNDED = BorderSet("╭", "╮", "╰", "╯", "│", "─")
    DOUBLE = BorderSet("╔", "╗", "╚", "╝", "║", "═")
    THICK = BorderSet("┏", "┓", "┗", "┛", "┃", "━")

    @property
    def symbols(self) -> BorderSet:
        return self.value


@dataclass(frozen=True)
class Padding:
    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0

    def __post_init__(self) -> None:
        if min(self.left, self.right, self.top, self.bottom) < 0:
            raise ValueError(f"padding must be non-negative, got {self}")

    @classmethod
    def uniform(cls, value: int) -> Padding:
        return cls(value, value, value, value)

    @classmethod
    def horizontal(cls, value: int) -> Padding:
        return cls(left=value, right=value)

    @classmethod
    def vertical(cls, value: int) -> Padding:
        return cls(top=value, bottom=value)


class TitlePosition(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Title:
    """A block title.  ``None`` fields fall back to the block's defaults."""

    content: Line
    alignment: Alignment | None = None
    position: TitlePosition | None = None


class Block:
    """A bordered box with optional titles; other widgets render inside ``inner()``."""

    def __init__(
        self,
        title: LineLike | None = None,
        borders: Borders = NO_BORDERS,
        border_type: BorderType = BorderType.PLAIN,
        border_style: Style | None = None,
        style: Style | None = None,
        title_style: Style | None = None,
        title_alignment: Alignment = Alignment.LEFT,
        title_position: TitlePosition = TitlePosition.TOP,
        padding: Padding | None = None,
    ) -> None:
        self._titles: list[Title] = []
        self._borders = borders
        self._border_type = border_type
        self._border_style = border_style or Style()
        self._style = style or Style()
        self._title_style = title_style or Style()
        self._title_alignment = title_alignment
        self._title_position = title_position
        self._padding = padding or Padding()
        if title is not None:
            self.add_title(title)

    @classmethod
    def bordered(cls, title: LineLike | None = None, **kwargs: Any) -> Block:
        """A block with all four borders."""
        return cls(title, ALL_BORDERS, **kwargs)

    def add_title(
        self,
        title: LineLike | Title,
        alignment: Alignment | None = None,
        position: TitlePosition | None = None,
    ) -> Block:
        if not isinstance(title, Title):
            title = Title(Line.from_(title), alignment, position)
        self._titles.append(title)
        return self

    @property
    def titles(self) -> list[Title]:
        return list(self._titles)

    def _has_titles(self, position: TitlePosition) -> bool:
        return any((t.position or self._title_position) is position for t in self._titles)

    def inner(self, area: Rect) -> Rect:
        """The area left for content once borders, title rows and padding are removed."""
        left = 1 if Borders.LEFT in self._borders else 0
        right = 1 if Borders.RIGHT in self._borders else 0
        top = 1 if Borders.TOP in self._borders or self._has_titles(TitlePosition.TOP) else 0
        bottom = (
            1
            if Borders.BOTTOM in self._borders or self._has_titles(TitlePosition.BOTTOM)
            else 0
        )
        left += self._padding.left
        right += self._padding.right
        top += self._padding.top
        bottom += self._padding.bottom

        x = min(area.x + left, area.right)
        y = min(area.y + top, area.bottom)
        width = max(0, area.width - left - right)
        height = max(0, area.height - top - bottom)
        return Rect(x, y, width, height)

    # -- rendering ----------------------------------------------------------

    def render(self, area: Rect, buf: Buffer) -> None:
        if area.is_empty():
            return
        buf.set_style(area, self._style)
        self._render_borders(area, buf)
        self._render_titles(TitlePosition.TOP, area, buf)
        self._render_titles(TitlePosition.BOTTOM, area, buf)

    def _render_borders(self, area: Rect, buf: Buffer) -> None:
        symbols = self._border_type.symbols
        style = self._border_style
        borders = self._borders

        if Borders.LEFT in borders:
            for y in range(area.top, area.bottom):
                buf.set_string(area.left, y, symbols.vertical, style)
        if Borders.TOP in borders:
            for x in range(area.left, area.right):
                buf.set_string(x, area.top, symbols.horizontal, style)
        if Borders.RIGHT in borders:
            for y in range(area.top, area.bottom):
                buf.set_string(area.right - 1, y, symbols.vertical, style)
        if Borders.BOTTOM in borders:
            for x in range(area.left, area.right):
                buf.set_string(x, area.bottom - 1, symbols.horizontal, style)

        # Corners
        if (Borders.TOP | Borders.LEFT) in borders:
            buf.set_string(area.left, area.top, symbols.top_left, style)
        if (Borders.TOP | Borders.RIGHT) in borders:
            buf.set_string(area.right - 1, area.top, symbols.top_right, style)
        if (Borders.BOTTOM | Borders.LEFT) in borders:
            buf.set_string(area.left, area.bottom - 1, symbols.bottom_left, style)
        if (Borders.BOTTOM | Borders.RIGHT) in borders:
            buf.set_string(area.right - 1, area.bottom - 1, symbols.bottom_right, style)

    def _render_titles(self, position: TitlePosition, area: Rect, buf: Buffer) -> None:
        lo = area.left + (1 if Borders.LEFT in self._borders else 0)
        hi = area.right - (1 if Borders.RIGHT in self._borders else 0)
        if hi <= lo:
            return
        y = area.top if position is TitlePosition.TOP else area.bottom - 1

        for alignment in Alignment:
            titles = [
                t
                for t in self._titles
                if (t.position or self._title_position) is position
                and (t.alignment or self._title_alignment) is alignment
            ]
            if not titles:
                continue
            # Titles sharing a slot are separated by one space.
            total = sum(t.content.width() for t in titles) + len(titles) - 1
            if alignment is Alignment.LEFT:
                x = lo
            elif alignment is Alignment.CENTER:
                x = lo + max(0, (hi - lo - total) // 2)
            else:
                x = max(lo, hi - total)
            for title in titles:
                if x >= hi:
                    break
                line = Line(
                    tuple(
                        Span(span.content, self._title_style.patch(span.style))
                        for span in title.content.spans
                    )
                )
                buf.set_line(x, y, line, hi - x)
                x += title.content.width() + 1
