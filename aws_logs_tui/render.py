"""
Projection of (catalog, selection) into drawable widgets.

`render` performs no I/O and keeps no state: identical inputs always give an
identical `Frame`. Styling is supplied by the caller as a `Style` value.
"""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Tuple

from aws_logs_tui.models import FunctionCatalog
from aws_logs_tui.selection import SelectionState

HEADER_TITLE = "AWS Logs TUI"
LIST_TITLE = "Functions"
DETAIL_TITLE = "Function Info"
FOOTER_HELP = "Use ↓↑ to move, ← to unselect, g/G to go top/bottom, q to quit."
NOTHING_SELECTED = "Nothing selected..."
NO_ENTRIES = "No functions available..."
HIGHLIGHT_SYMBOL = ">"


@dataclass(frozen=True)
class Style:
    header_attr: int
    band_a_attr: int
    band_b_attr: int
    highlight_attr: int
    detail_attr: int
    footer_attr: int


# Plain attributes; usable before curses is initialised.
DEFAULT_STYLE = Style(
    header_attr=curses.A_BOLD,
    band_a_attr=curses.A_NORMAL,
    band_b_attr=curses.A_DIM,
    highlight_attr=curses.A_REVERSE | curses.A_BOLD,
    detail_attr=curses.A_NORMAL,
    footer_attr=curses.A_REVERSE,
)


def init_style() -> Style:
    """Build a colour style after `curses.initscr()`; falls back to DEFAULT_STYLE."""
    if not curses.has_colors():
        return DEFAULT_STYLE
    try:
        curses.start_color()
    except curses.error:
        return DEFAULT_STYLE
    try:
        curses.use_default_colors()
    except curses.error:
        pass

    colors = getattr(curses, "COLORS", 0) or 0
    if colors >= 256:
        # Slate-like greys: band A darkest, band B a step lighter, highlight lighter still.
        band_a_bg, band_b_bg, selected_bg, header_bg = 233, 235, 238, 18
        fg = 252
    elif colors >= 16:
        band_a_bg, band_b_bg, selected_bg, header_bg = curses.COLOR_BLACK, 8, 8, curses.COLOR_BLUE
        fg = curses.COLOR_WHITE
    else:
        return DEFAULT_STYLE

    try:
        curses.init_pair(1, curses.COLOR_WHITE, header_bg)
        curses.init_pair(2, fg, band_a_bg)
        curses.init_pair(3, fg, band_b_bg)
        curses.init_pair(4, fg, selected_bg)
    except curses.error:
        return DEFAULT_STYLE
    return Style(
        header_attr=curses.color_pair(1) | curses.A_BOLD,
        band_a_attr=curses.color_pair(2),
        band_b_attr=curses.color_pair(3),
        highlight_attr=curses.color_pair(4) | curses.A_BOLD,
        detail_attr=curses.color_pair(2),
        footer_attr=curses.A_REVERSE,
    )


@dataclass(frozen=True)
class Paragraph:
    title: str
    text: str
    attr: int = 0


@dataclass(frozen=True)
class ListRow:
    text: str
    attr: int
    selected: bool = False


@dataclass(frozen=True)
class ListWidget:
    title: str
    rows: Tuple[ListRow, ...]
    selected: int = -1


@dataclass(frozen=True)
class Frame:
    header: Paragraph
    list: ListWidget
    detail: Paragraph
    footer: Paragraph


def band_attr(idx: int, style: Style) -> int:
    return style.band_a_attr if idx % 2 == 0 else style.band_b_attr


def detail_text(catalog: FunctionCatalog, state: SelectionState) -> str:
    if len(catalog) == 0:
        return NO_ENTRIES
    if state.cursor is None or not (0 <= state.cursor < len(catalog)):
        return NOTHING_SELECTED
    return catalog[state.cursor].name


def _list_rows(catalog: FunctionCatalog, state: SelectionState, style: Style) -> Tuple[ListRow, ...]:
    # Unselected rows keep a blank gutter as wide as the marker.
    blank = " " * len(HIGHLIGHT_SYMBOL)
    rows = []
    for i, fn in enumerate(catalog):
        if i == state.cursor:
            rows.append(ListRow(f"{HIGHLIGHT_SYMBOL} {fn.name}", style.highlight_attr, selected=True))
        else:
            rows.append(ListRow(f"{blank} {fn.name}", band_attr(i, style)))
    return tuple(rows)


def render(catalog: FunctionCatalog, state: SelectionState, style: Style = DEFAULT_STYLE) -> Frame:
    selected = state.cursor if state.cursor is not None and 0 <= state.cursor < len(catalog) else -1
    return Frame(
        header=Paragraph(HEADER_TITLE, HEADER_TITLE, style.header_attr),
        list=ListWidget(LIST_TITLE, _list_rows(catalog, state, style), selected=selected),
        detail=Paragraph(DETAIL_TITLE, detail_text(catalog, state), style.detail_attr),
        footer=Paragraph("", FOOTER_HELP, style.footer_attr),
    )
