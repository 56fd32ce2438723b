"""Tests for pane.tui.config -- defaults and environment overrides."""

from __future__ import annotations

import pytest

from pane.tui.config import TerminalConfig


class TestTerminalConfig:
    def test_defaults(self) -> None:
        config = TerminalConfig()
        assert config.alternate_screen is True
        assert config.hide_cursor is True
        assert config.raw_mode is True
        assert config.layout_cache_size == 16
        assert config.write_log == ""

    def test_empty_environment_gives_defaults(self) -> None:
        assert TerminalConfig.from_env({}) == TerminalConfig()

    def test_flags_from_environment(self) -> None:
        config = TerminalConfig.from_env(
            {
                "PANE_TUI_ALT_SCREEN": "0",
                "PANE_TUI_HIDE_CURSOR": "no",
                "PANE_TUI_RAW_MODE": " Off ",
            }
        )
        assert config.alternate_screen is False
        assert config.hide_cursor is False
        assert config.raw_mode is False

    def test_blank_value_falls_back_to_default(self) -> None:
        assert TerminalConfig.from_env({"PANE_TUI_RAW_MODE": "  "}).raw_mode is True

    def test_cache_size_and_write_log(self) -> None:
        config = TerminalConfig.from_env(
            {"PANE_TUI_LAYOUT_CACHE": "64", "PANE_TUI_WRITE_LOG": "/tmp/pane.log"}
        )
        assert config.layout_cache_size == 64
        assert config.write_log == "/tmp/pane.log"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PANE_TUI_ALT_SCREEN", "false")
        assert TerminalConfig.from_env().alternate_screen is False

    def test_invalid_flag(self) -> None:
        with pytest.raises(ValueError, match="PANE_TUI_HIDE_CURSOR"):
            TerminalConfig.from_env({"PANE_TUI_HIDE_CURSOR": "maybe"})

    @pytest.mark.parametrize("value", ["abc", "0", "-4"])
    def test_invalid_cache_size(self, value: str) -> None:
        with pytest.raises(ValueError, match="PANE_TUI_LAYOUT_CACHE"):
            TerminalConfig.from_env({"PANE_TUI_LAYOUT_CACHE": value})
