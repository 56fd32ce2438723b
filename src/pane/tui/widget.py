"""The widget contract.

A widget is anything with ``render(area, buf)``.  Widget values are cheap
and rebuilt every frame; state that must survive between frames (scroll
offset, selection) lives in a caller-owned object passed to stateful
widgets on every render.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from pane.tui.buffer import Buffer
from pane.tui.geometry import Rect

S = TypeVar("S", contravariant=True)


@runtime_checkable
class Widget(Protocol):
    """Draws itself into ``area`` of ``buf``."""

    def render(self, area: Rect, buf: Buffer) -> None:
        """Render into *area*.  Writes outside *area* must not happen."""
        ...


class StatefulWidget(Protocol[S]):
    """A widget that also reads and updates caller-owned state."""

    def render(self, area: Rect, buf: Buffer, state: S) -> None:
        ...


def is_widget(obj: object | None) -> bool:
    """Return ``True`` if *obj* can be rendered as a widget."""
    return obj is not None and callable(getattr(obj, "render", None))


def render_widget(widget: Widget, area: Rect, buf: Buffer) -> None:
    """Render *widget* into the part of *area* that lies inside *buf*."""
    clipped = area.intersection(buf.area)
    if clipped.is_empty():
        return
    widget.render(clipped, buf)


def render_stateful_widget(
    widget: StatefulWidget[Any], area: Rect, buf: Buffer, state: Any
) -> None:
    """Render a stateful widget; *state* is updated in place."""
    clipped = area.intersection(buf.area)
    if clipped.is_empty():
        return
    widget.render(clipped, buf, state)
