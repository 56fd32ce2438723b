"""Colors, text modifiers and composable styles.

A :class:`Style` is an *incremental* change: applying several styles to a
cell one after another gives the same result as applying their composition
once.  ``patch`` is that composition and it is associative, so nested
widgets can stack container and child styles in any grouping.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class Color(enum.Enum):
    """Reset plus the 16 base terminal colors.

    As in most terminals' palettes, the plain names are the *light*
    variants and the ``DARK_`` names the normal-intensity ones.
    """

    RESET = "reset"
    BLACK = "black"
    DARK_RED = "dark_red"
    DARK_GREEN = "dark_green"
    DARK_YELLOW = "dark_yellow"
    DARK_BLUE = "dark_blue"
    DARK_MAGENTA = "dark_magenta"
    DARK_CYAN = "dark_cyan"
    GRAY = "gray"
    DARK_GRAY = "dark_gray"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"

    @classmethod
    def parse_ansi(cls, ansi: str) -> ColorValue | None:
        """Parse the tail of an extended SGR color sequence.

        ``"5;n"`` is a 256-color index (``0..15`` map to the named colors),
        ``"2;r;g;b"`` is true color.  Anything else returns ``None``.
        """
        parts = ansi.split(";")
        try:
            values = [int(p) for p in parts]
        except ValueError:
            return None
        if any(v < 0 or v > 255 for v in values):
            return None
        if len(values) == 2 and values[0] == 5:
            index = values[1]
            if index < len(_PALETTE):
                return _PALETTE[index]
            return Indexed(index)
        if len(values) == 4 and values[0] == 2:
            return Rgb(values[1], values[2], values[3])
        return None


@dataclass(frozen=True)
class Rgb:
    """24-bit true color."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range: {self!r}")


@dataclass(frozen=True)
class Indexed:
    """A color from the 256-color palette."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 255:
            raise ValueError(f"palette index out of range: {self.value}")


ColorValue = Union[Color, Rgb, Indexed]

# Palette order of the 16 base colors (SGR 30-37, then 90-97).
_PALETTE: tuple[Color, ...] = (
    Color.BLACK,
    Color.DARK_RED,
    Color.DARK_GREEN,
    Color.DARK_YELLOW,
    Color.DARK_BLUE,
    Color.DARK_MAGENTA,
    Color.DARK_CYAN,
    Color.GRAY,
    Color.DARK_GRAY,
    Color.RED,
    Color.GREEN,
    Color.YELLOW,
    Color.BLUE,
    Color.MAGENTA,
    Color.CYAN,
    Color.WHITE,
)


def _base_code(color: Color) -> int:
    index = _PALETTE.index(color)
    return 30 + index if index < 8 else 90 + index - 8


def fg_params(color: ColorValue) -> str:
    """SGR parameters selecting *color* as the foreground."""
    if isinstance(color, Rgb):
        return f"38;2;{color.r};{color.g};{color.b}"
    if isinstance(color, Indexed):
        return f"38;5;{color.value}"
    if color is Color.RESET:
        return "39"
    return str(_base_code(color))


def bg_params(color: ColorValue) -> str:
    """SGR parameters selecting *color* as the background."""
    if isinstance(color, Rgb):
        return f"48;2;{color.r};{color.g};{color.b}"
    if isinstance(color, Indexed):
        return f"48;5;{color.value}"
    if color is Color.RESET:
        return "49"
    return str(_base_code(color) + 10)


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------


class Modifier(enum.Flag):
    """Text attributes; combine with ``|``.  ``Modifier(0)`` is "none"."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    SLOW_BLINK = enum.auto()
    RAPID_BLINK = enum.auto()
    REVERSED = enum.auto()
    HIDDEN = enum.auto()
    CROSSED_OUT = enum.auto()


NO_MODIFIER = Modifier(0)
ALL_MODIFIERS = NO_MODIFIER
for _member in Modifier:
    ALL_MODIFIERS |= _member
del _member

_SET_CODES: dict[Modifier, str] = {
    Modifier.REVERSED: "7",
    Modifier.BOLD: "1",
    Modifier.ITALIC: "3",
    Modifier.UNDERLINED: "4",
    Modifier.DIM: "2",
    Modifier.CROSSED_OUT: "9",
    Modifier.SLOW_BLINK: "5",
    Modifier.RAPID_BLINK: "6",
    Modifier.HIDDEN: "8",
}


def iter_modifiers(modifier: Modifier) -> Iterator[Modifier]:
    """Yield the single flags set in *modifier*, in declaration order."""
    for member in Modifier:
        if member in modifier:
            yield member


def modifier_transition(from_: Modifier, to: Modifier) -> list[str]:
    """SGR parameters that turn attribute set *from_* into *to*.

    SGR 22 clears both bold and dim, so whichever of the two must survive
    is switched back on afterwards.
    """
    removed = from_ & ~to
    added = to & ~from_
    params: list[str] = []

    if removed & Modifier.REVERSED:
        params.append("27")
    if removed & (Modifier.BOLD | Modifier.DIM):
        params.append("22")
        added |= to & (Modifier.BOLD | Modifier.DIM)
    if removed & Modifier.ITALIC:
        params.append("23")
    if removed & Modifier.UNDERLINED:
        params.append("24")
    if removed & Modifier.CROSSED_OUT:
        params.append("29")
    if removed & (Modifier.SLOW_BLINK | Modifier.RAPID_BLINK):
        params.append("25")
        added |= to & (Modifier.SLOW_BLINK | Modifier.RAPID_BLINK)
    if removed & Modifier.HIDDEN:
        params.append("28")

    for flag, code in _SET_CODES.items():
        if flag in added:
            params.append(code)
    return params


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Style:
    """An incremental change to a cell's colors and modifiers.

    ``None`` colors leave the underlying color untouched.  A modifier that
    appears in both ``add_modifier`` and ``sub_modifier`` is treated as
    added.
    """

    fg: ColorValue | None = None
    bg: ColorValue | None = None
    add_modifier: Modifier = field(default=NO_MODIFIER)
    sub_modifier: Modifier = field(default=NO_MODIFIER)

    def __post_init__(self) -> None:
        if self.sub_modifier & self.add_modifier:
            object.__setattr__(
                self, "sub_modifier", self.sub_modifier & ~self.add_modifier
            )

    @classmethod
    def reset(cls) -> Style:
        """A style that resets colors and clears every modifier."""
        return cls(fg=Color.RESET, bg=Color.RESET, sub_modifier=ALL_MODIFIERS)

    @classmethod
    def from_(cls, value: Style | ColorValue | Modifier | None) -> Style:
        """Coerce a color (as foreground), a modifier or ``None`` to a style."""
        if value is None:
            return cls()
        if isinstance(value, Style):
            return value
        if isinstance(value, Modifier):
            return cls(add_modifier=value)
        if isinstance(value, (Color, Rgb, Indexed)):
            return cls(fg=value)
        raise TypeError(f"cannot convert {type(value).__name__} to Style")

    # -- builders -------------------------------------------------------

    def with_fg(self, color: ColorValue) -> Style:
        return Style(color, self.bg, self.add_modifier, self.sub_modifier)

    def with_bg(self, color: ColorValue) -> Style:
        return Style(self.fg, color, self.add_modifier, self.sub_modifier)

    def add(self, modifier: Modifier) -> Style:
        """Return a copy that also switches *modifier* on."""
        return Style(
            self.fg,
            self.bg,
            self.add_modifier | modifier,
            self.sub_modifier & ~modifier,
        )

    def remove(self, modifier: Modifier) -> Style:
        """Return a copy that also switches *modifier* off."""
        return Style(
            self.fg,
            self.bg,
            self.add_modifier & ~modifier,
            self.sub_modifier | modifier,
        )

    def bold(self) -> Style:
        return self.add(Modifier.BOLD)

    def dim(self) -> Style:
        return self.add(Modifier.DIM)

    def italic(self) -> Style:
        return self.add(Modifier.ITALIC)

    def underlined(self) -> Style:
        return self.add(Modifier.UNDERLINED)

    def reversed(self) -> Style:
        return self.add(Modifier.REVERSED)

    def crossed_out(self) -> Style:
        return self.add(Modifier.CROSSED_OUT)

    # -- composition ----------------------------------------------------

    def patch(self, other: Style) -> Style:
        """Apply *other* on top of this style."""
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            add_modifier=(self.add_modifier & ~other.sub_modifier)
            | other.add_modifier,
            sub_modifier=(self.sub_modifier & ~other.add_modifier)
            | other.sub_modifier,
        )

    def apply_to(self, modifier: Modifier) -> Modifier:
        """The modifier set that results from applying this style to *modifier*."""
        return (modifier & ~self.sub_modifier) | self.add_modifier


def compose(*styles: Style) -> Style:
    """Patch *styles* left to right onto an empty style."""
    result = Style()
    for style in styles:
        result = result.patch(style)
    return result
