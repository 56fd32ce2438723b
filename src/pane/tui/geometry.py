"""Rectangles and margins in terminal cell coordinates."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Margin:
    """Symmetric margin: ``horizontal`` cells left and right, ``vertical`` top and bottom."""

    horizontal: int = 0
    vertical: int = 0

    def __post_init__(self) -> None:
        if self.horizontal < 0 or self.vertical < 0:
            raise ValueError(f"margin must be non-negative, got {self}")

    def __str__(self) -> str:
        return f"{self.horizontal}x{self.vertical}"


@dataclass(frozen=True)
class Position:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned area of the screen.

    All fields are non-negative.  ``right`` and ``bottom`` are exclusive,
    i.e. the first column/row *outside* the rectangle.  Derived rectangles
    never underflow: a margin or intersection that leaves nothing yields a
    zero-area rectangle.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0 or self.width < 0 or self.height < 0:
            raise ValueError(f"Rect fields must be non-negative, got {self!r}")

    @classmethod
    def sized(cls, width: int, height: int) -> Rect:
        """A rectangle of the given size anchored at the origin."""
        return cls(0, 0, width, height)

    # -- derived values -------------------------------------------------

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    # -- derived rectangles ---------------------------------------------

    def inner(self, margin: Margin) -> Rect:
        """Shrink by *margin* on every side.

        If the margin does not fit, the result is an empty rectangle at the
        origin (mirroring ``Rect()``), never a negative size.
        """
        dx = margin.horizontal * 2
        dy = margin.vertical * 2
        if self.width < dx or self.height < dy:
            return Rect()
        return Rect(
            self.x + margin.horizontal,
            self.y + margin.vertical,
            self.width - dx,
            self.height - dy,
        )

    def intersection(self, other: Rect) -> Rect:
        """The overlapping part of both rectangles (zero-area if disjoint)."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))

    def intersects(self, other: Rect) -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def union(self, other: Rect) -> Rect:
        """The smallest rectangle containing both."""
        x1 = min(self.x, other.x)
        y1 = min(self.y, other.y)
        x2 = max(self.right, other.right)
        y2 = max(self.bottom, other.bottom)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    # -- iteration ------------------------------------------------------

    def positions(self) -> Iterator[Position]:
        """Yield every cell position in row-major order."""
        for y in range(self.top, self.bottom):
            for x in range(self.left, self.right):
                yield Position(x, y)
