"""Terminal text utilities: grapheme segmentation and display width.

Everything that decides how many terminal columns a piece of text occupies
lives here, so that the buffer, the styled-text types and the widgets all
agree on the same measurement.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

# Escape sequences embedded in widget text would desynchronise the
# attribute state the backend tracks, so they never reach a cell.
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;?]*[A-Za-z]"                # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"    # OSC
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"     # APC
)

TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Sanitising and segmentation
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Remove CSI, OSC and APC escape sequences from *text*."""
    if "\x1b" not in text:
        return text
    return _STRIP_RE.sub("", text)


def sanitize(text: str) -> str:
    """Prepare *text* for cell output: drop escapes, expand tabs."""
    return strip_ansi(text).replace("\t", " " * TAB_WIDTH)


def graphemes(text: str) -> Iterator[str]:
    """Iterate over the extended grapheme clusters of *text*."""
    return grapheme.graphemes(text)


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.

    The result is always 0, 1 or 2.
    """
    if not g:
        return 0

    # Single codepoint fast path
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        w = _wcwidth.wcwidth(g)
        return min(max(w, 0), 2)

    for ch in g:
        cp = ord(ch)
        if cp == 0xFE0F:  # VS16
            return 2
        if cp == 0x200D:  # ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0
    if first_cp < 0x20 or (0x7F <= first_cp <= 0x9F):
        return 0

    w = _wcwidth.wcwidth(g[0])
    return min(max(w, 0), 2)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    * Strips ANSI escape sequences.
    * Treats tabs as ``TAB_WIDTH`` spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = sanitize(text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += grapheme_width(g)

    return _cache_width(stripped, total)


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* is a whitespace character."""
    return char in (" ", "\t", "\n", "\r", "\f", "\v")


def is_cell_symbol(text: str) -> bool:
    """Return ``True`` if *text* is one printable grapheme of width 1 or 2."""
    if not text or grapheme.length(text, 2) != 1:
        return False
    if any(unicodedata.category(ch) == "Cc" for ch in text):
        return False
    return grapheme_width(text) > 0
