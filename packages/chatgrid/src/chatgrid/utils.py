"""
Terminal text measuring utilities.

Provides:
- glyphs(): split text into grapheme clusters (base + combining marks)
- glyph_width(): terminal column width of a single cluster
- display_width(): terminal column width of a string
- truncate_to_width(): clip a string to a column budget
"""
from __future__ import annotations

import unicodedata

from wcwidth import wcwidth

TAB_EXPANSION = "   "

# ─────────────────────────────────────────────────────────────────────────────
# Width cache (small LRU-style dict)
# ─────────────────────────────────────────────────────────────────────────────
_WIDTH_CACHE_SIZE = 512
_width_cache: dict[str, int] = {}
_width_cache_order: list[str] = []

_JOINERS = (0x200D, 0xFE0F, 0x20E3)


def _could_be_emoji(cp: int, cluster: str) -> bool:
    return (
        (0x1f000 <= cp <= 0x1fbff) or
        (0x2600 <= cp <= 0x27bf) or
        "\ufe0f" in cluster
    )


def glyph_width(cluster: str) -> int:
    """Calculate the terminal width of a single grapheme cluster."""
    if not cluster:
        return 0

    cp = ord(cluster[0])

    # Zero-width control / combining characters
    if all(unicodedata.category(c) in ("Mn", "Me", "Cf", "Cc", "Cs") for c in cluster):
        return 0

    # Emoji sequences (ZWJ, skin tones, VS16) are drawn two columns wide
    if _could_be_emoji(cp, cluster) and len(cluster) > 1:
        return 2

    w = wcwidth(cluster[0])
    if w < 0:
        return 0
    return w


def glyphs(text: str) -> list[str]:
    """Segment text into grapheme clusters, grouping combining marks with their base."""
    if not text:
        return []
    clusters: list[str] = []
    i = 0
    while i < len(text):
        cluster = text[i]
        i += 1
        while i < len(text):
            ch = text[i]
            if unicodedata.category(ch) in ("Mn", "Me") or ord(ch) in _JOINERS:
                cluster += ch
                i += 1
            else:
                break
        clusters.append(cluster)
    return clusters


def display_width(s: str) -> int:
    """Calculate the terminal column width of a string. Tabs count as three columns."""
    if not s:
        return 0

    # Fast path: pure ASCII printable
    if all(0x20 <= ord(c) <= 0x7e for c in s):
        return len(s)

    cached = _width_cache.get(s)
    if cached is not None:
        return cached

    clean = s.replace("\t", TAB_EXPANSION) if "\t" in s else s
    width = sum(glyph_width(g) for g in glyphs(clean))

    if len(_width_cache) >= _WIDTH_CACHE_SIZE:
        oldest = _width_cache_order.pop(0) if _width_cache_order else next(iter(_width_cache))
        _width_cache.pop(oldest, None)
    _width_cache[s] = width
    _width_cache_order.append(s)

    return width


def truncate_to_width(text: str, max_width: int, ellipsis: str = "") -> str:
    """Truncate text to max_width columns, appending ellipsis when something was cut."""
    if max_width <= 0:
        return ""
    if display_width(text) <= max_width:
        return text

    target = max_width - display_width(ellipsis)
    if target <= 0:
        return truncate_to_width(ellipsis, max_width)

    result = ""
    current = 0
    for g in glyphs(text):
        w = glyph_width(g)
        if current + w > target:
            break
        result += g
        current += w
    return result + ellipsis
