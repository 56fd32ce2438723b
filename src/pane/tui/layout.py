"""Constraint-based layout solver.

``split`` partitions a rectangle along one axis into one sub-rectangle per
constraint.  The solver is pure, so results are memoized in a small
process-wide LRU cache keyed by the area and the layout value.
"""

from __future__ import annotations

import enum
import logging
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple, Union

from pane.tui.errors import LayoutError
from pane.tui.geometry import Margin, Rect

logger = logging.getLogger(__name__)


class Direction(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


def _non_negative(kind: str, **values: int) -> None:
    for name, value in values.items():
        if value < 0:
            raise LayoutError(f"{kind} {name} must be non-negative, got {value}")


@dataclass(frozen=True)
class Length:
    """Exactly ``value`` cells (less if the space runs out)."""

    value: int

    def __post_init__(self) -> None:
        _non_negative("Length", value=self.value)

    def apply(self, length: int) -> int:
        return min(length, self.value)


# Same constraint under the name used for fixed-size panes.
Fixed = Length


@dataclass(frozen=True)
class Percentage:
    """``value`` percent of the usable length, rounded down."""

    value: int

    def __post_init__(self) -> None:
        _non_negative("Percentage", value=self.value)

    def apply(self, length: int) -> int:
        return min(length, length * self.value // 100)


@dataclass(frozen=True)
class Ratio:
    """``numerator / denominator`` of the usable length, rounded down.

    A zero denominator is treated as one.
    """

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        _non_negative("Ratio", numerator=self.numerator, denominator=self.denominator)

    def apply(self, length: int) -> int:
        return min(length, length * self.numerator // max(self.denominator, 1))


@dataclass(frozen=True)
class Min:
    """At least ``value`` cells."""

    value: int

    def __post_init__(self) -> None:
        _non_negative("Min", value=self.value)

    def apply(self, length: int) -> int:
        return max(length, self.value)


@dataclass(frozen=True)
class Max:
    """At most ``value`` cells."""

    value: int

    def __post_init__(self) -> None:
        _non_negative("Max", value=self.value)

    def apply(self, length: int) -> int:
        return min(length, self.value)


@dataclass(frozen=True)
class Fill:
    """A share of whatever is left, proportional to ``weight``."""

    weight: int = 1

    def __post_init__(self) -> None:
        _non_negative("Fill", weight=self.weight)

    def apply(self, length: int) -> int:
        return length


Constraint = Union[Length, Percentage, Ratio, Min, Max, Fill]

_CONSTRAINT_TYPES = (Length, Percentage, Ratio, Min, Max, Fill)


def _demand(constraint: Constraint, usable: int) -> int:
    if isinstance(constraint, (Percentage, Ratio)):
        return constraint.apply(usable)
    if isinstance(constraint, Fill):
        return 0
    return constraint.value


# Allocation passes, highest priority first.  Fill takes what is left.
_PASSES: tuple[tuple[type, ...], ...] = (
    (Length,),
    (Min,),
    (Percentage, Ratio),
    (Max,),
)


def solve_lengths(usable: int, constraints: tuple[Constraint, ...]) -> list[int]:
    """Split *usable* cells among *constraints*; the result always sums to *usable*.

    Demands are met pass by pass in priority order; once the space runs
    out, the remaining constraints get zero.  Fill constraints then share
    the rest by weight with truncated shares, and the leftover units go one
    each to the earliest weighted fills.  Without any fill the rest goes to
    the last ``Min``, else the last constraint that is not a ``Max``, and
    only when every constraint is a ``Max`` to the last one.
    """
    sizes = [0] * len(constraints)
    if not constraints:
        return sizes
    remaining = usable
    for kinds in _PASSES:
        for i, constraint in enumerate(constraints):
            if isinstance(constraint, kinds):
                take = min(_demand(constraint, usable), remaining)
                sizes[i] = take
                remaining -= take

    if remaining == 0:
        return sizes

    weights = {i: c.weight for i, c in enumerate(constraints) if isinstance(c, Fill)}
    fills = list(weights)
    if fills:
        if sum(weights.values()) == 0:
            weights = {i: 1 for i in fills}
        total = sum(weights.values())
        for i in fills:
            sizes[i] = remaining * weights[i] // total
        leftover = remaining - sum(sizes[i] for i in fills)
        for i in (i for i in fills if weights[i] > 0):
            if leftover == 0:
                break
            sizes[i] += 1
            leftover -= 1
        return sizes

    mins = [i for i, c in enumerate(constraints) if isinstance(c, Min)]
    unbounded = [i for i, c in enumerate(constraints) if not isinstance(c, Max)]
    if mins:
        recipient = mins[-1]
    elif unbounded:
        recipient = unbounded[-1]
    else:
        recipient = len(constraints) - 1
    sizes[recipient] += remaining
    return sizes


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    maxsize: int
    currsize: int


DEFAULT_CACHE_SIZE = 16

_cache: OrderedDict[tuple[Rect, Layout], tuple[Rect, ...]] = OrderedDict()
_cache_size = DEFAULT_CACHE_SIZE
_hits = 0
_misses = 0


@dataclass(frozen=True)
class Layout:
    """A direction, a list of constraints, an outer margin and inner spacing.

    Layouts are values: builder methods return modified copies.

    Example::

        header, body = Layout.vertical([Length(1), Fill()]).split(area)
    """

    direction: Direction = Direction.VERTICAL
    constraints: tuple[Constraint, ...] = ()
    margin: Margin = field(default_factory=Margin)
    spacing: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        for constraint in self.constraints:
            if not isinstance(constraint, _CONSTRAINT_TYPES):
                raise LayoutError(f"not a constraint: {constraint!r}")
        if self.spacing < 0:
            raise LayoutError(f"spacing must be non-negative, got {self.spacing}")

    @classmethod
    def vertical(cls, constraints: Iterable[Constraint]) -> Layout:
        return cls(Direction.VERTICAL, tuple(constraints))

    @classmethod
    def horizontal(cls, constraints: Iterable[Constraint]) -> Layout:
        return cls(Direction.HORIZONTAL, tuple(constraints))

    def with_direction(self, direction: Direction) -> Layout:
        return Layout(direction, self.constraints, self.margin, self.spacing)

    def with_constraints(self, constraints: Iterable[Constraint]) -> Layout:
        return Layout(self.direction, tuple(constraints), self.margin, self.spacing)

    def with_margin(self, margin: Margin | int) -> Layout:
        if isinstance(margin, int):
            if margin < 0:
                raise LayoutError(f"margin must be non-negative, got {margin}")
            margin = Margin(margin, margin)
        return Layout(self.direction, self.constraints, margin, self.spacing)

    def with_spacing(self, spacing: int) -> Layout:
        return Layout(self.direction, self.constraints, self.margin, spacing)

    # -- solving --------------------------------------------------------

    def split(self, area: Rect) -> tuple[Rect, ...]:
        """One rectangle per constraint, in order (memoized)."""
        global _hits, _misses
        key = (area, self)
        cached = _cache.get(key)
        if cached is not None:
            _cache.move_to_end(key)
            _hits += 1
            return cached
        _misses += 1
        result = self._solve(area)
        logger.debug("layout cache miss: %s %s -> %d rects", area, self.direction.name, len(result))
        _cache[key] = result
        while len(_cache) > _cache_size:
            _cache.popitem(last=False)
        return result

    def _solve(self, area: Rect) -> tuple[Rect, ...]:
        inner = area.inner(self.margin)
        n = len(self.constraints)
        if n == 0:
            return ()
        horizontal = self.direction is Direction.HORIZONTAL
        length = inner.width if horizontal else inner.height
        spacing = self.spacing
        if n > 1 and spacing * (n - 1) > length:
            spacing = length // (n - 1)
        usable = length - spacing * (n - 1)

        sizes = solve_lengths(usable, self.constraints)
        rects: list[Rect] = []
        pos = inner.x if horizontal else inner.y
        for size in sizes:
            if horizontal:
                rects.append(Rect(pos, inner.y, size, inner.height))
            else:
                rects.append(Rect(inner.x, pos, inner.width, size))
            pos += size + spacing
        return tuple(rects)

    # -- cache ----------------------------------------------------------

    @staticmethod
    def init_cache(size: int) -> None:
        """Set the cache capacity, evicting the oldest entries if it shrinks."""
        global _cache_size
        if size < 1:
            raise ValueError(f"layout cache size must be at least 1, got {size}")
        _cache_size = size
        while len(_cache) > _cache_size:
            _cache.popitem(last=False)

    @staticmethod
    def cache_info() -> CacheInfo:
        return CacheInfo(_hits, _misses, _cache_size, len(_cache))

    @staticmethod
    def cache_clear() -> None:
        global _hits, _misses
        _cache.clear()
        _hits = 0
        _misses = 0


def split(
    area: Rect,
    direction: Direction,
    constraints: Iterable[Constraint],
    spacing: int = 0,
    margin: Margin | None = None,
) -> tuple[Rect, ...]:
    """Partition *area* along *direction*; see :func:`solve_lengths`."""
    return Layout(direction, tuple(constraints), margin or Margin(), spacing).split(area)
