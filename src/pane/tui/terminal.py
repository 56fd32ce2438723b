"""The terminal renderer.

A :class:`Terminal` owns two buffers, the frame on screen and the frame
being drawn.  Each :meth:`Terminal.draw` hands the current buffer to the
host's render callback, diffs it against the previous one and pushes only
the changed cells through the :class:`~pane.tui.backend.Backend`.

Lifecycle::

    UNINITIALIZED --enter--> READY --suspend--> SUSPENDED --enter--> READY
          \\                   |                   |
           +------------------+-------exit--------+-----> TORN_DOWN

``exit()`` is reachable from every state and always restores the terminal,
so the usual pattern is a ``with`` block::

    with Terminal(backend) as term:
        term.draw(lambda area, buf: Paragraph("hello").render(area, buf))
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from pane.tui.backend import Backend
from pane.tui.buffer import Buffer, DiffRun, coalesce_runs
from pane.tui.config import TerminalConfig
from pane.tui.errors import TerminalStateError
from pane.tui.geometry import Position, Rect
from pane.tui.layout import Layout
from pane.tui.style import Style

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Rect, Buffer], None]


class TerminalState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SUSPENDED = "suspended"
    TORN_DOWN = "torn_down"


@dataclass
class CompletedFrame:
    """Summary of a frame that reached the backend.

    ``buffer`` is the rendered frame; it stays valid until the next
    ``draw()``.
    """

    area: Rect
    buffer: Buffer
    count: int
    cells: int
    runs: int
    full_redraw: bool


class Terminal:
    """Double-buffered renderer over a :class:`~pane.tui.backend.Backend`."""

    def __init__(self, backend: Backend, config: TerminalConfig | None = None) -> None:
        self.backend = backend
        self.config = config if config is not None else TerminalConfig.from_env()
        Layout.init_cache(self.config.layout_cache_size)

        self._area: Rect = backend.size()
        self._buffers: list[Buffer] = [Buffer.empty(self._area), Buffer.empty(self._area)]
        self._current: int = 0
        self._state = TerminalState.UNINITIALIZED

        # A frame whose output is buffered in the backend but not yet flushed.
        self._pending: CompletedFrame | None = None
        self._force_full: bool = False
        # Bumped by every full-redraw request; a pending frame only satisfies
        # the requests made before it was built.
        self._redraw_generation: int = 0
        self._pending_generation: int = 0
        self._cursor_position: Position | None = None

        # Metrics
        self._frame_count: int = 0
        self._full_redraw_count: int = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> TerminalState:
        return self._state

    @property
    def area(self) -> Rect:
        return self._area

    @property
    def current_buffer(self) -> Buffer:
        return self._buffers[self._current]

    @property
    def previous_buffer(self) -> Buffer:
        return self._buffers[1 - self._current]

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def full_redraws(self) -> int:
        """Number of frames written in full rather than differentially."""
        return self._full_redraw_count

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def enter(self) -> None:
        """Take over the terminal: raw mode, alternate screen, hidden cursor.

        Re-entering after :meth:`suspend` repaints the whole frame on the
        next :meth:`draw`.
        """
        if self._state is TerminalState.TORN_DOWN:
            raise TerminalStateError("cannot enter a terminal that has been torn down")
        if self._state is TerminalState.READY:
            return
        resuming = self._state is TerminalState.SUSPENDED

        try:
            if self.config.raw_mode:
                self.backend.enter_raw_mode()
            if self.config.alternate_screen:
                self.backend.enter_alternate_screen()
            if self.config.hide_cursor:
                self.backend.hide_cursor()
            self.backend.clear()
            self.backend.flush()
        except BaseException:
            # Give back whatever was acquired; the original error wins.
            try:
                self._restore()
            except Exception:
                logger.warning("could not restore the terminal after a failed enter")
            raise
        if resuming:
            self.previous_buffer.reset()
            self._force_full = True
            self._redraw_generation += 1

        logger.debug("terminal %s -> READY", self._state.name)
        self._state = TerminalState.READY

    def suspend(self) -> None:
        """Hand the terminal back to the shell, keeping the frame state."""
        if self._state is not TerminalState.READY:
            raise TerminalStateError(f"cannot suspend from {self._state.name}")
        self._restore()
        logger.debug("terminal READY -> SUSPENDED")
        self._state = TerminalState.SUSPENDED

    def exit(self) -> None:
        """Tear down, restoring the terminal.  Safe to call more than once.

        Every restoration step runs even if an earlier one fails; the first
        failure is re-raised once all of them have been attempted.
        """
        if self._state is TerminalState.TORN_DOWN:
            return
        previous = self._state
        self._state = TerminalState.TORN_DOWN
        if previous is TerminalState.READY:
            self._restore()
        logger.debug("terminal %s -> TORN_DOWN", previous.name)

    def _restore(self) -> None:
        steps: list[Callable[[], None]] = [
            lambda: self.backend.set_style(Style.reset()),
            self.backend.show_cursor,
        ]
        if self.config.alternate_screen:
            steps.append(self.backend.leave_alternate_screen)
        steps.append(self.backend.flush)
        if self.config.raw_mode:
            steps.append(self.backend.leave_raw_mode)

        first_error: BaseException | None = None
        for step in steps:
            try:
                step()
            except Exception as exc:
                logger.exception("failed to restore terminal state")
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def __enter__(self) -> Terminal:
        self.enter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.exit()

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    def resize(self, area: Rect) -> None:
        """Reallocate both buffers for *area* and repaint everything next frame."""
        logger.info("terminal resized %s -> %s", self._area, area)
        self._area = area
        self._buffers = [Buffer.empty(area), Buffer.empty(area)]
        self._force_full = True
        self._redraw_generation += 1
        if self._state is TerminalState.READY:
            self.backend.clear()

    def autoresize(self) -> None:
        """Resize if the backend reports a different size than the buffers have."""
        size = self.backend.size()
        if size != self._area:
            self.resize(size)

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def set_cursor_position(self, position: Position | None) -> None:
        """Leave the hardware cursor at *position* after each frame (``None`` to stop)."""
        self._cursor_position = position

    def show_cursor(self) -> None:
        self.backend.show_cursor()
        self.backend.flush()

    def hide_cursor(self) -> None:
        self.backend.hide_cursor()
        self.backend.flush()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Clear the screen and repaint everything on the next frame."""
        self.previous_buffer.reset()
        self._force_full = True
        self._redraw_generation += 1
        self.backend.clear()
        self.backend.flush()

    def draw(self, render: RenderCallback) -> CompletedFrame | None:
        """Render one frame.

        *render* is called with the full area and the buffer to draw into.
        Returns ``None`` when the terminal was resized while *render* ran: the
        frame is discarded and the next call repaints everything.

        Raises :class:`~pane.tui.errors.BackendIOError` if the output could
        not be flushed.  The frame is then kept and re-sent by the next
        :meth:`flush` or :meth:`draw`.
        """
        if self._state is not TerminalState.READY:
            raise TerminalStateError(f"cannot draw while {self._state.name}")
        if self._pending is not None:
            self.flush()

        self.autoresize()
        area = self._area
        buf = self.current_buffer
        try:
            render(area, buf)
        except BaseException:
            buf.reset()
            raise

        size = self.backend.size()
        if size != area:
            logger.info("terminal resized during draw, discarding frame")
            self.resize(size)
            return None

        full = self._force_full
        updates = self.previous_buffer.diff(buf, force=full)
        runs = coalesce_runs(updates)
        self._emit(runs)
        self.backend.set_style(Style.reset())
        if self._cursor_position is not None:
            self.backend.move_cursor(self._cursor_position.x, self._cursor_position.y)

        self._pending = CompletedFrame(
            area=area,
            buffer=buf,
            count=self._frame_count,
            cells=len(updates),
            runs=len(runs),
            full_redraw=full,
        )
        self._pending_generation = self._redraw_generation
        return self.flush()

    def flush(self) -> CompletedFrame | None:
        """Flush buffered output, completing a pending frame if there is one."""
        self.backend.flush()
        frame, self._pending = self._pending, None
        if frame is None:
            return None

        if frame.full_redraw:
            if self._pending_generation == self._redraw_generation:
                self._force_full = False
            self._full_redraw_count += 1
        self._frame_count += 1
        self._current = 1 - self._current
        self.current_buffer.reset()
        logger.debug(
            "frame %d: %d cells in %d runs (full=%s)",
            frame.count,
            frame.cells,
            frame.runs,
            frame.full_redraw,
        )
        return frame

    def _emit(self, runs: list[DiffRun]) -> None:
        for run in runs:
            self.backend.move_cursor(run.x, run.y)
            cells = run.cells
            i = 0
            while i < len(cells):
                cell = cells[i]
                if cell.is_continuation:
                    i += 1
                    continue
                j = i + 1
                while j < len(cells) and cells[j] == cell:
                    j += 1
                self.backend.set_style(cell.style())
                self.backend.write_run(cell, j - i)
                i = j
