"""Built-in widgets."""

from pane.tui.widgets.block import (
    ALL_BORDERS,
    NO_BORDERS,
    Block,
    Borders,
    BorderSet,
    BorderType,
    Padding,
    Title,
    TitlePosition,
)
from pane.tui.widgets.clear import Clear
from pane.tui.widgets.gauge import Gauge
from pane.tui.widgets.list import List, ListItem, ListState
from pane.tui.widgets.paragraph import Paragraph, Wrap, wrap_graphemes
from pane.tui.widgets.scrollbar import (
    DOUBLE_HORIZONTAL,
    DOUBLE_VERTICAL,
    HORIZONTAL,
    VERTICAL,
    ScrollDirection,
    Scrollbar,
    ScrollbarOrientation,
    ScrollbarState,
    ScrollbarSymbols,
)
from pane.tui.widgets.tabs import Tabs

__all__ = [
    "ALL_BORDERS",
    "DOUBLE_HORIZONTAL",
    "DOUBLE_VERTICAL",
    "HORIZONTAL",
    "VERTICAL",
    "NO_BORDERS",
    "Block",
    "BorderSet",
    "BorderType",
    "Borders",
    "Clear",
    "Gauge",
    "List",
    "ListItem",
    "ListState",
    "Padding",
    "Paragraph",
    "ScrollDirection",
    "Scrollbar",
    "ScrollbarOrientation",
    "ScrollbarState",
    "ScrollbarSymbols",
    "Tabs",
    "Title",
    "TitlePosition",
    "Wrap",
    "wrap_graphemes",
]
