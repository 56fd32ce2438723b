"""Cells and the screen buffer.

A :class:`Buffer` is a row-major grid of :class:`Cell` values covering a
:class:`~pane.tui.geometry.Rect`.  Coordinates passed to buffer methods are
*global* (the buffer's area may start anywhere), and every write outside
the area is silently dropped so widgets can never corrupt their
neighbours.

Wide graphemes occupy two cells: the lead cell holds the grapheme and the
cell to its right is a *continuation* placeholder whose symbol is the
empty string.  The buffer inserts and repairs continuations itself; a
continuation can never be written directly.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from pane.tui.errors import CellError
from pane.tui.geometry import Position, Rect
from pane.tui.style import (
    ALL_MODIFIERS,
    NO_MODIFIER,
    Color,
    ColorValue,
    Modifier,
    Style,
)
from pane.tui.text import Line, Span
from pane.tui.utils import grapheme_width, graphemes, is_cell_symbol, sanitize

# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------


@dataclass
class Cell:
    """One character slot and its visual attributes.

    ``skip`` marks a cell whose screen content is owned by something else
    (e.g. an inline image): the diff never emits it and ``merge`` treats it
    as transparent.
    """

    symbol: str = " "
    fg: ColorValue = Color.RESET
    bg: ColorValue = Color.RESET
    modifier: Modifier = field(default=NO_MODIFIER)
    skip: bool = False

    @property
    def width(self) -> int:
        return grapheme_width(self.symbol)

    @property
    def is_continuation(self) -> bool:
        return self.symbol == ""

    def set_symbol(self, symbol: str) -> Cell:
        self.symbol = symbol
        return self

    def set_char(self, ch: str) -> Cell:
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self.symbol = ch
        return self

    def set_fg(self, color: ColorValue) -> Cell:
        self.fg = color
        return self

    def set_bg(self, color: ColorValue) -> Cell:
        self.bg = color
        return self

    def set_style(self, style: Style) -> Cell:
        """Patch *style* onto this cell."""
        if style.fg is not None:
            self.fg = style.fg
        if style.bg is not None:
            self.bg = style.bg
        self.modifier = style.apply_to(self.modifier)
        return self

    def set_skip(self, skip: bool) -> Cell:
        self.skip = skip
        return self

    def style(self) -> Style:
        """The cell's attributes as an absolute style."""
        return Style(
            fg=self.fg,
            bg=self.bg,
            add_modifier=self.modifier,
            sub_modifier=ALL_MODIFIERS & ~self.modifier,
        )

    def same_style(self, other: Cell) -> bool:
        return (
            self.fg == other.fg
            and self.bg == other.bg
            and self.modifier == other.modifier
        )

    def reset(self) -> None:
        self.symbol = " "
        self.fg = Color.RESET
        self.bg = Color.RESET
        self.modifier = NO_MODIFIER
        self.skip = False

    def copy(self) -> Cell:
        return replace(self)

    def _continuation(self) -> Cell:
        return Cell("", self.fg, self.bg, self.modifier, self.skip)


CellUpdate = tuple[int, int, Cell]


@dataclass
class DiffRun:
    """Horizontally adjacent updates on one row, written after one cursor move."""

    x: int
    y: int
    cells: list[Cell] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.x + len(self.cells)


def coalesce_runs(updates: Iterable[CellUpdate]) -> list[DiffRun]:
    """Group row-major *updates* into runs of consecutive cells."""
    runs: list[DiffRun] = []
    for x, y, cell in updates:
        if runs and runs[-1].y == y and runs[-1].end == x:
            runs[-1].cells.append(cell)
        else:
            runs.append(DiffRun(x, y, [cell]))
    return runs


# ---------------------------------------------------------------------------
# Buffer
# ---------------------------------------------------------------------------


class Buffer:
    """A 2-D grid of cells for one render pass."""

    def __init__(self, area: Rect, content: list[Cell] | None = None) -> None:
        if content is None:
            content = [Cell() for _ in range(area.area)]
        elif len(content) != area.area:
            raise ValueError(
                f"buffer of {area.width}x{area.height} needs {area.area} cells, "
                f"got {len(content)}"
            )
        self.area = area
        self.content = content

    # -- constructors ---------------------------------------------------

    @classmethod
    def empty(cls, area: Rect) -> Buffer:
        return cls(area)

    @classmethod
    def filled(cls, area: Rect, cell: Cell) -> Buffer:
        if cell.is_continuation:
            raise CellError("cannot fill a buffer with continuation cells")
        _check_symbol(cell)
        return cls(area, [cell.copy() for _ in range(area.area)])

    @classmethod
    def with_lines(cls, lines: Sequence[str | Span | Line]) -> Buffer:
        """A buffer at the origin just large enough to hold *lines*."""
        converted = [Line.from_(line) for line in lines]
        width = max((line.width() for line in converted), default=0)
        buf = cls(Rect.sized(width, len(converted)))
        for y, line in enumerate(converted):
            buf.set_line(0, y, line, width)
        return buf

    # -- indexing -------------------------------------------------------

    def index_of(self, x: int, y: int) -> int:
        """Index into ``content`` of global position ``(x, y)``."""
        if not self.area.contains(x, y):
            raise IndexError(f"({x}, {y}) is outside {self.area}")
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def pos_of(self, index: int) -> tuple[int, int]:
        """Global position of ``content[index]``."""
        if not 0 <= index < len(self.content):
            raise IndexError(f"index {index} outside buffer of {len(self.content)} cells")
        row, col = divmod(index, self.area.width)
        return self.area.x + col, self.area.y + row

    def get(self, x: int, y: int) -> Cell:
        """The cell at ``(x, y)``; a fresh default cell when out of range."""
        if not self.area.contains(x, y):
            return Cell()
        return self.content[self.index_of(x, y)]

    # -- writing --------------------------------------------------------

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Store a copy of *cell* at ``(x, y)``; no-op outside the area.

        A double-width cell also claims the next column as its
        continuation.  If that column is outside the area, a blank with the
        same style is written instead.  Any wide glyph that is partly
        overwritten loses its other half.
        """
        if cell.is_continuation:
            raise CellError(f"continuation cells cannot be written directly at ({x}, {y})")
        _check_symbol(cell)
        if not self.area.contains(x, y):
            return
        index = self.index_of(x, y)
        self._detach(index, x)
        new = cell.copy()
        if new.width < 2:
            self.content[index] = new
            return
        if x + 1 >= self.area.right:
            new.symbol = " "
            self.content[index] = new
            return
        self._detach(index + 1, x + 1)
        self.content[index] = new
        self.content[index + 1] = new._continuation()

    def _detach(self, index: int, x: int) -> None:
        # Blank the other half of a wide glyph about to lose one of its cells.
        current = self.content[index]
        if current.is_continuation:
            if x > self.area.x and self.content[index - 1].width == 2:
                self.content[index - 1].symbol = " "
        elif current.width == 2 and x + 1 < self.area.right:
            nxt = self.content[index + 1]
            if nxt.is_continuation:
                nxt.symbol = " "

    def set_stringn(
        self,
        x: int,
        y: int,
        string: str,
        max_width: int,
        style: Style | None = None,
    ) -> tuple[int, int]:
        """Write at most *max_width* columns of *string* starting at ``(x, y)``.

        Each grapheme keeps the cell's existing attributes patched with
        *style*.  Zero-width graphemes are skipped, and writing stops at the
        first grapheme that would not fit.  Returns the position after the
        last written column.
        """
        if not self.area.contains(x, y):
            return x, y
        style = style or Style()
        limit = min(self.area.right, x + max(0, max_width))
        for g in graphemes(sanitize(string)):
            w = grapheme_width(g)
            if w == 0:
                continue
            if x + w > limit:
                break
            existing = self.get(x, y)
            cell = Cell(g, existing.fg, existing.bg, existing.modifier)
            cell.set_style(style)
            self.set(x, y, cell)
            x += w
        return x, y

    def set_string(
        self, x: int, y: int, string: str, style: Style | None = None
    ) -> tuple[int, int]:
        return self.set_stringn(x, y, string, sys.maxsize, style)

    def set_span(self, x: int, y: int, span: Span, max_width: int) -> tuple[int, int]:
        return self.set_stringn(x, y, span.content, max_width, span.style)

    def set_line(self, x: int, y: int, line: Line, max_width: int) -> tuple[int, int]:
        """Write the spans of *line* left to right within *max_width* columns."""
        remaining = max_width
        for span in line.spans:
            if remaining <= 0:
                break
            end_x, _ = self.set_stringn(x, y, span.content, remaining, span.style)
            remaining -= end_x - x
            x = end_x
        return x, y

    def set_style(self, area: Rect, style: Style) -> None:
        """Patch *style* onto every cell of *area* that lies inside the buffer."""
        clipped = self.area.intersection(area)
        for y in range(clipped.top, clipped.bottom):
            start = self.index_of(clipped.x, y) if clipped.width else 0
            for i in range(start, start + clipped.width):
                self.content[i].set_style(style)

    def apply(self, updates: Iterable[CellUpdate]) -> None:
        """Store diff *updates* verbatim, continuation cells included."""
        for x, y, cell in updates:
            if self.area.contains(x, y):
                self.content[self.index_of(x, y)] = cell.copy()

    # -- whole-buffer operations ----------------------------------------

    def reset(self) -> None:
        for cell in self.content:
            cell.reset()

    def resize(self, area: Rect) -> None:
        """Reallocate for *area*, keeping cells where the old and new areas overlap."""
        old = Buffer(self.area, self.content)
        self.area = area
        self.content = [Cell() for _ in range(area.area)]
        overlap = old.area.intersection(area)
        for y in range(overlap.top, overlap.bottom):
            for x in range(overlap.left, overlap.right):
                self.content[self.index_of(x, y)] = old.content[old.index_of(x, y)]
        for y in range(area.top, area.bottom):
            if area.width == 0:
                break
            first = self.content[self.index_of(area.x, y)]
            if first.is_continuation:
                first.symbol = " "
            last = self.content[self.index_of(area.right - 1, y)]
            if last.width == 2:
                last.symbol = " "

    def merge(self, other: Buffer, offset: Position | None = None) -> None:
        """Overlay *other* onto this buffer.

        Each cell of *other* lands at its own global position moved by
        *offset*.  Cells falling outside this buffer are dropped and skipped
        cells leave the content underneath untouched.
        """
        dx = offset.x if offset is not None else 0
        dy = offset.y if offset is not None else 0
        for i, cell in enumerate(other.content):
            if cell.skip or cell.is_continuation:
                continue
            x, y = other.pos_of(i)
            self.set(x + dx, y + dy, cell)

    # -- diffing --------------------------------------------------------

    def diff(self, other: Buffer, force: bool = False) -> list[CellUpdate]:
        """Updates that turn this (previous) buffer into *other* (current).

        The walk is row-major.  A wide glyph is emitted together with its
        continuation whenever either of the two cells changed, and a
        continuation is never emitted on its own.  Skipped cells are never
        emitted.  With ``force`` (or when the areas differ) every cell of
        *other* is emitted.
        """
        force = force or self.area != other.area
        updates: list[CellUpdate] = []
        cur = other.content
        prev = self.content
        width = other.area.width
        for i, cell in enumerate(cur):
            if cell.skip or cell.is_continuation:
                continue
            col = i % width
            wide = cell.width == 2 and col + 1 < width and cur[i + 1].is_continuation
            changed = force or cell != prev[i]
            if wide and not changed:
                changed = cur[i + 1] != prev[i + 1]
            if not changed:
                continue
            x, y = other.pos_of(i)
            updates.append((x, y, cell.copy()))
            if wide:
                updates.append((x + 1, y, cur[i + 1].copy()))
        return updates

    # -- inspection -----------------------------------------------------

    def as_lines(self) -> list[str]:
        """Row strings of the buffer's symbols (continuations contribute nothing)."""
        width = self.area.width
        return [
            "".join(c.symbol for c in self.content[row * width:(row + 1) * width])
            for row in range(self.area.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.area == other.area and self.content == other.content

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        lines = [f"Buffer(area={self.area!r},", "  content=["]
        lines.extend(f"    {line!r}," for line in self.as_lines())
        lines.append("  ],")
        lines.append("  styles=[")
        last: Cell | None = None
        for i, cell in enumerate(self.content):
            if cell.is_continuation:
                continue
            if last is None or not cell.same_style(last):
                x, y = self.pos_of(i)
                lines.append(
                    f"    x={x}, y={y}, fg={_color_name(cell.fg)}, "
                    f"bg={_color_name(cell.bg)}, modifier={_modifier_name(cell.modifier)},"
                )
                last = cell
        lines.append("  ])")
        return "\n".join(lines)


def _check_symbol(cell: Cell) -> None:
    # Anything else would shift the columns after it or reach the terminal
    # as a control sequence.
    if not is_cell_symbol(cell.symbol):
        raise CellError(
            f"cell symbol must be one printable grapheme, got {cell.symbol!r}"
        )


def _color_name(color: ColorValue) -> str:
    return color.name if isinstance(color, Color) else repr(color)


def _modifier_name(modifier: Modifier) -> str:
    names = [m.name for m in Modifier if m in modifier]
    return "|".join(names) if names else "NONE"
