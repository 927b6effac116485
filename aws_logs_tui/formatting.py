from __future__ import annotations

import unicodedata
from typing import List


def clamp(v: int, lo: int, hi: int) -> int:
    if hi < lo:
        return lo
    return max(lo, min(hi, v))


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def display_width(s: str) -> int:
    return sum(char_width(ch) for ch in s)


def truncate_to_width(s: str, width: int) -> str:
    """
    Cut `s` so it occupies at most `width` terminal columns.

    Wide (CJK) characters count as two columns and are never split.
    """
    if width <= 0:
        return ""
    out: List[str] = []
    used = 0
    for ch in s:
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def pad_to_width(s: str, width: int) -> str:
    s = truncate_to_width(s, width)
    return s + " " * max(0, width - display_width(s))


def wrap_text(text: str, width: int) -> List[str]:
    if width <= 0:
        return []
    lines: List[str] = []
    for raw in text.splitlines() or [""]:
        if not raw:
            lines.append("")
            continue
        cur = ""
        for ch in raw:
            if display_width(cur) + char_width(ch) > width:
                lines.append(cur)
                cur = ""
            cur += ch
        lines.append(cur)
    return lines
