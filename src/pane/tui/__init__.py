"""pane-tui: cell-buffer terminal rendering with differential redraws."""

# Backends
from pane.tui.backend import Backend, ProcessBackend, StreamBackend

# Cells and buffers
from pane.tui.buffer import Buffer, Cell, CellUpdate, DiffRun, coalesce_runs

# Configuration
from pane.tui.config import TerminalConfig

# Errors
from pane.tui.errors import (
    BackendIOError,
    CellError,
    LayoutError,
    PaneError,
    TerminalStateError,
)

# Geometry
from pane.tui.geometry import Margin, Position, Rect

# Layout
from pane.tui.layout import (
    Constraint,
    Direction,
    Fill,
    Fixed,
    Layout,
    Length,
    Max,
    Min,
    Percentage,
    Ratio,
    split,
)

# Styles
from pane.tui.style import (
    ALL_MODIFIERS,
    NO_MODIFIER,
    Color,
    ColorValue,
    Indexed,
    Modifier,
    Rgb,
    Style,
    compose,
)

# Terminal
from pane.tui.terminal import CompletedFrame, Terminal, TerminalState

# Styled text
from pane.tui.text import Alignment, Line, Masked, Span, StyledGrapheme, Text

# Utilities
from pane.tui.utils import (
    grapheme_width,
    strip_ansi,
    visible_width,
)

# Widget contract
from pane.tui.widget import (
    StatefulWidget,
    Widget,
    is_widget,
    render_stateful_widget,
    render_widget,
)

__all__ = [
    # Backends
    "Backend",
    "ProcessBackend",
    "StreamBackend",
    # Cells and buffers
    "Buffer",
    "Cell",
    "CellUpdate",
    "DiffRun",
    "coalesce_runs",
    # Configuration
    "TerminalConfig",
    # Errors
    "BackendIOError",
    "CellError",
    "LayoutError",
    "PaneError",
    "TerminalStateError",
    # Geometry
    "Margin",
    "Position",
    "Rect",
    # Layout
    "Constraint",
    "Direction",
    "Fill",
    "Fixed",
    "Layout",
    "Length",
    "Max",
    "Min",
    "Percentage",
    "Ratio",
    "split",
    # Styles
    "ALL_MODIFIERS",
    "NO_MODIFIER",
    "Color",
    "ColorValue",
    "Indexed",
    "Modifier",
    "Rgb",
    "Style",
    "compose",
    # Terminal
    "CompletedFrame",
    "Terminal",
    "TerminalState",
    # Styled text
    "Alignment",
    "Line",
    "Masked",
    "Span",
    "StyledGrapheme",
    "Text",
    # Utilities
    "grapheme_width",
    "strip_ansi",
    "visible_width",
    # Widget contract
    "StatefulWidget",
    "Widget",
    "is_widget",
    "render_stateful_widget",
    "render_widget",
]
