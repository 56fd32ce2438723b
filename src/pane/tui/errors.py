"""Exception types raised by the rendering engine."""

from __future__ import annotations


class PaneError(Exception):
    """Base class for every error raised by ``pane.tui``."""


class LayoutError(PaneError, ValueError):
    """A constraint set (or layout spacing/margin) is malformed."""


class CellError(PaneError, ValueError):
    """A cell write would break the wide-character invariant."""


class BackendIOError(PaneError, OSError):
    """The output channel refused a write or a flush.

    The frame that was being flushed is kept so that a retry re-sends
    exactly the same output.
    """


class TerminalStateError(PaneError, RuntimeError):
    """An operation is not valid in the terminal's current lifecycle state."""
