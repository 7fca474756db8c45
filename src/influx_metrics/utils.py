"""Utility helpers shared by the adapters."""

from __future__ import annotations

_ESCAPE = "\\"


# ---------------------------------------------------------------------------
# Escape-aware splitting
# ---------------------------------------------------------------------------


def split_unescaped(text: str, delimiter: str, maxsplit: int = -1) -> list[str]:
    """Split ``text`` on ``delimiter`` characters not preceded by a backslash.

    Escaped delimiters are emitted as the literal character. Other escape
    sequences are left untouched so a later pass can still see them.
    """
    parts: list[str] = []
    current: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == _ESCAPE and i + 1 < len(text) and text[i + 1] == delimiter:
            current.append(delimiter)
            i += 2
            continue
        if ch == delimiter and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    parts.append("".join(current))
    return parts


def has_unescaped(text: str, delimiter: str) -> bool:
    return len(split_unescaped(text, delimiter, maxsplit=1)) > 1


def resolve_escapes(text: str) -> str:
    """Turn ``\\,`` and ``\\=`` into the literal characters."""
    return text.replace(_ESCAPE + ",", ",").replace(_ESCAPE + "=", "=")


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def lower_and_replace_spaces(value: str, replacement: str = "_") -> str:
    return value.strip().lower().replace(" ", replacement)
