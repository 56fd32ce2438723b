"""Output backends.

A :class:`Backend` turns cursor moves, style changes and cell runs into
terminal control sequences.  Output is buffered and only reaches the
underlying channel on :meth:`Backend.flush`; a failed flush keeps the
buffered output so that calling ``flush()`` again re-sends exactly the same
bytes.

Two implementations are provided:

* :class:`StreamBackend` writes to any text or binary file-like object
  (a host-provided virtual stream, a pipe, ``io.StringIO``...).
* :class:`ProcessBackend` drives the real controlling terminal via
  :mod:`termios`/:mod:`tty` and reports resizes through ``SIGWINCH``.
"""

from __future__ import annotations

import io
import logging
import os
import signal
import sys
import termios
import tty
from typing import IO, Any, Callable, Protocol

from pane.tui.buffer import Cell
from pane.tui.config import TerminalConfig
from pane.tui.errors import BackendIOError
from pane.tui.geometry import Rect
from pane.tui.style import (
    NO_MODIFIER,
    Color,
    ColorValue,
    Modifier,
    Style,
    bg_params,
    fg_params,
    modifier_transition,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_MOVE_CURSOR_FMT = "\x1b[{};{}H"
_SGR_FMT = "\x1b[{}m"

_FALLBACK_COLUMNS = 80
_FALLBACK_ROWS = 24


# ---------------------------------------------------------------------------
# Backend protocol
# ---------------------------------------------------------------------------


class Backend(Protocol):
    """Interface the :class:`~pane.tui.terminal.Terminal` renders through."""

    def write_run(self, cell: Cell, count: int) -> None: ...

    def move_cursor(self, x: int, y: int) -> None: ...

    def set_style(self, style: Style) -> None: ...

    def flush(self) -> None: ...

    def size(self) -> Rect: ...

    def enter_raw_mode(self) -> None: ...

    def leave_raw_mode(self) -> None: ...

    def show_cursor(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def enter_alternate_screen(self) -> None: ...

    def leave_alternate_screen(self) -> None: ...

    def clear(self) -> None: ...


# ---------------------------------------------------------------------------
# StreamBackend
# ---------------------------------------------------------------------------


class StreamBackend:
    """Backend writing ANSI sequences to a file-like *stream*.

    The stream's size is whatever the host says it is: pass it at
    construction and update it with :meth:`set_size` when the host learns
    about a resize.  Raw mode is only tracked as a flag since a plain
    stream has no line discipline.
    """

    def __init__(
        self,
        stream: IO[Any],
        size: Rect | None = None,
        write_log: str = "",
    ) -> None:
        self._stream = stream
        self._binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))
        self._size = size if size is not None else Rect.sized(_FALLBACK_COLUMNS, _FALLBACK_ROWS)
        self._write_log_path = write_log
        self._pending: list[str] = []

        # Attribute and cursor state as the terminal will see it once the
        # pending output is flushed.  ``None`` means unknown.
        self._fg: ColorValue = Color.RESET
        self._bg: ColorValue = Color.RESET
        self._modifier: Modifier = NO_MODIFIER
        self._cursor: tuple[int, int] | None = None

        self.raw_mode = False
        self.cursor_hidden = False
        self.alternate_screen = False

    # -- sizing -------------------------------------------------------------

    def size(self) -> Rect:
        return self._size

    def set_size(self, size: Rect) -> None:
        self._size = size

    # -- drawing ------------------------------------------------------------

    def move_cursor(self, x: int, y: int) -> None:
        if self._cursor == (x, y):
            return
        self._pending.append(_MOVE_CURSOR_FMT.format(y + 1, x + 1))
        self._cursor = (x, y)

    def set_style(self, style: Style) -> None:
        """Switch to ``current + style``, emitting only the changed attributes."""
        fg = style.fg if style.fg is not None else self._fg
        bg = style.bg if style.bg is not None else self._bg
        modifier = style.apply_to(self._modifier)

        params = modifier_transition(self._modifier, modifier)
        if fg != self._fg:
            params.append(fg_params(fg))
        if bg != self._bg:
            params.append(bg_params(bg))
        if params:
            self._pending.append(_SGR_FMT.format(";".join(params)))
        self._fg, self._bg, self._modifier = fg, bg, modifier

    def write_run(self, cell: Cell, count: int) -> None:
        """Write *cell*'s symbol *count* times at the cursor.

        Attributes are whatever the last :meth:`set_style` selected.
        Continuation cells write nothing: the terminal already advanced
        past them when their lead glyph was printed.
        """
        if count <= 0 or cell.is_continuation:
            return
        self._pending.append(cell.symbol * count)
        if self._cursor is not None:
            x, y = self._cursor
            self._cursor = (x + cell.width * count, y)

    # -- modes --------------------------------------------------------------

    def enter_raw_mode(self) -> None:
        self.raw_mode = True

    def leave_raw_mode(self) -> None:
        self.raw_mode = False

    def show_cursor(self) -> None:
        self._pending.append(_SHOW_CURSOR)
        self.cursor_hidden = False

    def hide_cursor(self) -> None:
        self._pending.append(_HIDE_CURSOR)
        self.cursor_hidden = True

    def enter_alternate_screen(self) -> None:
        self._pending.append(_ALT_SCREEN_ENABLE)
        self.alternate_screen = True
        self._cursor = None

    def leave_alternate_screen(self) -> None:
        self._pending.append(_ALT_SCREEN_DISABLE)
        self.alternate_screen = False
        self._cursor = None

    def clear(self) -> None:
        self.set_style(Style.reset())
        self._pending.append(_CLEAR_SCREEN)
        self._cursor = (0, 0)

    # -- output -------------------------------------------------------------

    @property
    def pending(self) -> str:
        """Output buffered since the last successful flush."""
        return "".join(self._pending)

    def flush(self) -> None:
        """Write all buffered output to the stream.

        Raises :class:`BackendIOError` if the stream refuses the write; the
        buffered output is kept for the next attempt.
        """
        if not self._pending:
            return
        data = "".join(self._pending)
        try:
            self._stream.write(data.encode("utf-8") if self._binary else data)
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise BackendIOError(f"failed to write {len(data)} chars to terminal: {exc}") from exc
        self._pending.clear()
        self._log_write(data)

    def _log_write(self, data: str) -> None:
        if not self._write_log_path:
            return
        try:
            with open(self._write_log_path, "a", encoding="utf-8") as f:
                f.write(data)
        except OSError:
            pass


# ---------------------------------------------------------------------------
# ProcessBackend
# ---------------------------------------------------------------------------


class ProcessBackend(StreamBackend):
    """Backend bound to the process's controlling terminal.

    Raw mode is applied to *input_fd* with :func:`tty.setraw` and the
    original attributes are restored by :meth:`leave_raw_mode`.  Call
    :meth:`watch_resize` to be notified on ``SIGWINCH``.
    """

    def __init__(
        self,
        stream: IO[Any] | None = None,
        input_fd: int | None = None,
        config: TerminalConfig | None = None,
    ) -> None:
        config = config or TerminalConfig.from_env()
        super().__init__(stream or sys.stdout, write_log=config.write_log)
        self._input_fd = input_fd
        self._original_termios: list[Any] | None = None
        self._prev_sigwinch_handler: Any = None
        self._resize_handler: Callable[[], None] | None = None

    def _fd(self) -> int:
        return self._input_fd if self._input_fd is not None else sys.stdin.fileno()

    # -- sizing -------------------------------------------------------------

    def size(self) -> Rect:
        try:
            columns, lines = os.get_terminal_size(self._stream.fileno())
        except (AttributeError, ValueError, OSError):
            return Rect.sized(_FALLBACK_COLUMNS, _FALLBACK_ROWS)
        return Rect.sized(columns, lines)

    # -- raw mode -----------------------------------------------------------

    def enter_raw_mode(self) -> None:
        if self._original_termios is not None:
            return
        fd = self._fd()
        try:
            self._original_termios = termios.tcgetattr(fd)
            if not _already_raw(self._original_termios):
                tty.setraw(fd)
        except termios.error as exc:
            self._original_termios = None
            raise BackendIOError(f"cannot enter raw mode on fd {fd}: {exc}") from exc
        self.raw_mode = True

    def leave_raw_mode(self) -> None:
        if self._original_termios is None:
            self.raw_mode = False
            return
        fd = self._fd()
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        except termios.error as exc:
            raise BackendIOError(f"cannot restore terminal mode on fd {fd}: {exc}") from exc
        finally:
            self._original_termios = None
            self.raw_mode = False

    # -- resize notification ------------------------------------------------

    def watch_resize(self, handler: Callable[[], None]) -> None:
        """Call *handler* whenever the terminal reports a new size."""
        self._resize_handler = handler
        if self._prev_sigwinch_handler is None:
            self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
            signal.signal(signal.SIGWINCH, self._on_sigwinch)

    def unwatch_resize(self) -> None:
        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None
        self._resize_handler = None

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        logger.debug("SIGWINCH received")
        if self._resize_handler is not None:
            self._resize_handler()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _already_raw(attrs: list) -> bool:
    # tcgetattr layout: [iflag, oflag, cflag, lflag, ispeed, ospeed, cc].
    # Canonical input and echo both off is what tty.setraw would give us.
    return not attrs[3] & (termios.ICANON | termios.ECHO)
