"""Terminal configuration with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass
class TerminalConfig:
    """How a :class:`~pane.tui.terminal.Terminal` drives its backend.

    ``alternate_screen``, ``hide_cursor`` and ``raw_mode`` are applied on
    ``enter()`` and undone on ``suspend()``/``exit()``.  ``write_log`` names
    a file that receives a copy of every flushed chunk of output.
    """

    alternate_screen: bool = True
    hide_cursor: bool = True
    raw_mode: bool = True
    layout_cache_size: int = 16
    write_log: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TerminalConfig:
        """Build a config from ``PANE_TUI_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            alternate_screen=_env_flag(env, "PANE_TUI_ALT_SCREEN", True),
            hide_cursor=_env_flag(env, "PANE_TUI_HIDE_CURSOR", True),
            raw_mode=_env_flag(env, "PANE_TUI_RAW_MODE", True),
            layout_cache_size=_env_int(env, "PANE_TUI_LAYOUT_CACHE", 16),
            write_log=env.get("PANE_TUI_WRITE_LOG", ""),
        )
