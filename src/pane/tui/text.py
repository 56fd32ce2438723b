"""Styled text: spans, lines and multi-line text blocks."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

from pane.tui.style import Style
from pane.tui.utils import grapheme_width, graphemes, sanitize, visible_width


class Alignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class StyledGrapheme:
    """One grapheme cluster with the style it should be drawn with."""

    symbol: str
    style: Style

    @property
    def width(self) -> int:
        return grapheme_width(self.symbol)


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style.  Never contains a newline."""

    content: str
    style: Style = field(default_factory=Style)

    @classmethod
    def raw(cls, content: str) -> Span:
        return cls(content)

    @classmethod
    def styled(cls, content: str, style: Style) -> Span:
        return cls(content, style)

    def width(self) -> int:
        return visible_width(self.content)

    def patch_style(self, style: Style) -> Span:
        return Span(self.content, self.style.patch(style))

    def styled_graphemes(self, base_style: Style) -> Iterator[StyledGrapheme]:
        """Yield the span's printable graphemes styled with ``base_style + style``."""
        style = base_style.patch(self.style)
        for g in graphemes(sanitize(self.content)):
            if g == "\n":
                continue
            yield StyledGrapheme(g, style)


SpanLike = Union[str, Span]


def _to_span(value: SpanLike) -> Span:
    return value if isinstance(value, Span) else Span(value)


@dataclass(frozen=True)
class Line:
    """A single line of styled spans with an optional alignment."""

    spans: tuple[Span, ...] = ()
    alignment: Alignment | None = None

    @classmethod
    def from_(cls, value: LineLike) -> Line:
        """Coerce a string, a span, a list of either, or a line."""
        if isinstance(value, Line):
            return value
        if isinstance(value, (str, Span)):
            return cls((_to_span(value),))
        return cls(tuple(_to_span(v) for v in value))

    @classmethod
    def raw(cls, content: str) -> Line:
        return cls((Span(content),))

    @classmethod
    def styled(cls, content: str, style: Style) -> Line:
        return cls((Span(content, style),))

    def width(self) -> int:
        return sum(span.width() for span in self.spans)

    def aligned(self, alignment: Alignment) -> Line:
        return Line(self.spans, alignment)

    def patch_style(self, style: Style) -> Line:
        return Line(tuple(s.patch_style(style) for s in self.spans), self.alignment)

    def styled_graphemes(self, base_style: Style) -> Iterator[StyledGrapheme]:
        for span in self.spans:
            yield from span.styled_graphemes(base_style)

    def plain(self) -> str:
        return "".join(span.content for span in self.spans)


LineLike = Union[str, Span, Line, Iterable[SpanLike]]


@dataclass(frozen=True)
class Masked:
    """Text displayed as one ``mask_char`` per grapheme, e.g. a password.

    ``str()`` gives the masked form; the real value stays in ``inner``.
    """

    inner: str = field(repr=False)
    mask_char: str = "*"

    def __post_init__(self) -> None:
        if grapheme_width(self.mask_char) != 1 or len(list(graphemes(self.mask_char))) != 1:
            raise ValueError(f"mask_char must be one single-width grapheme, got {self.mask_char!r}")

    @property
    def value(self) -> str:
        return self.mask_char * sum(1 for _ in graphemes(self.inner))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Text:
    """A block of lines.

    ``Text.from_("a\\nb")`` splits on newlines; a list of line-likes is
    taken one entry per line.
    """

    lines: tuple[Line, ...] = ()
    alignment: Alignment | None = None

    @classmethod
    def from_(cls, value: TextLike) -> Text:
        if isinstance(value, Text):
            return value
        if isinstance(value, Masked):
            return cls((Line.raw(value.value),))
        if isinstance(value, str):
            return cls(tuple(Line.raw(part) for part in value.split("\n")))
        if isinstance(value, (Line, Span)):
            return cls((Line.from_(value),))
        return cls(tuple(Line.from_(v) for v in value))

    @classmethod
    def styled(cls, content: str, style: Style) -> Text:
        return cls(tuple(Line.styled(part, style) for part in content.split("\n")))

    @property
    def height(self) -> int:
        return len(self.lines)

    def width(self) -> int:
        return max((line.width() for line in self.lines), default=0)

    def patch_style(self, style: Style) -> Text:
        return Text(tuple(line.patch_style(style) for line in self.lines), self.alignment)


TextLike = Union[str, Span, Line, Text, Masked, Iterable[LineLike]]
