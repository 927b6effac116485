from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from aws_logs_tui.errors import InputError
from aws_logs_tui.formatting import clamp, display_width, pad_to_width, truncate_to_width, wrap_text
from aws_logs_tui.models import FunctionCatalog
from aws_logs_tui.render import Frame, ListWidget, Paragraph, Style, init_style, render
from aws_logs_tui.selection import Action, KeyEvent, SelectionState, action_for_event, transition

_ESC = 27


@dataclass(frozen=True)
class Rect:
    y: int
    x: int
    h: int
    w: int


@dataclass(frozen=True)
class Layout:
    header: Rect
    list: Rect
    detail: Rect
    footer: Rect


def compute_layout(max_y: int, max_x: int) -> Layout:
    """
    Stack header (2 rows), list, detail and footer (1 row) vertically.

    List and detail share the remaining height; the list gets the extra row
    when it doesn't divide evenly.
    """
    max_y = max(0, max_y)
    max_x = max(0, max_x)
    header_h = min(2, max_y)
    footer_h = 1 if max_y - header_h >= 1 else 0
    main_h = max(0, max_y - header_h - footer_h)
    list_h = (main_h + 1) // 2
    detail_h = main_h - list_h
    return Layout(
        header=Rect(0, 0, header_h, max_x),
        list=Rect(header_h, 0, list_h, max_x),
        detail=Rect(header_h + list_h, 0, detail_h, max_x),
        footer=Rect(header_h + main_h, 0, footer_h, max_x),
    )


class ListViewport:
    """Scroll offset of the list pane. View state only; never part of a Frame."""

    def __init__(self) -> None:
        self.scroll = 0

    def ensure_visible(self, selected: int, view_h: int, n_items: int) -> None:
        if n_items <= 0 or view_h <= 0:
            self.scroll = 0
            return
        max_scroll = max(0, n_items - view_h)
        if selected >= 0:
            if selected < self.scroll:
                self.scroll = selected
            elif selected >= self.scroll + view_h:
                self.scroll = selected - view_h + 1
        self.scroll = clamp(self.scroll, 0, max_scroll)


def _safe_addstr(win: "curses.window", y: int, x: int, s: str, attr: int = 0) -> None:
    try:
        win.addstr(y, x, s, attr)
    except curses.error:
        # Writing the bottom-right cell raises even though the text is drawn.
        return


class _Pane:
    """
    A titled region: one title row above a content window.

    Rows are cached so only changed lines are rewritten on each frame.
    """

    def __init__(self, stdscr: "curses.window", rect: Rect, *, titled: bool = True) -> None:
        self.rect = rect
        self.win: Optional["curses.window"] = None
        self.inner: Optional["curses.window"] = None
        self._titled = titled
        self._title_cache: Optional[Tuple[str, int]] = None
        self._inner_cache: List[Tuple[str, int]] = []
        if rect.h <= 0 or rect.w <= 0:
            return
        self.win = stdscr.derwin(rect.h, rect.w, rect.y, rect.x)
        self.win.leaveok(True)
        top = 1 if titled else 0
        if rect.h - top > 0:
            self.inner = self.win.derwin(rect.h - top, rect.w, top, 0)
            self.inner.leaveok(True)

    @property
    def inner_size(self) -> Tuple[int, int]:
        if self.inner is None:
            return 0, 0
        return self.inner.getmaxyx()

    def draw_title(self, title: str, attr: int, *, force: bool = False) -> None:
        if self.win is None or not self._titled:
            return
        w = self.rect.w
        t = truncate_to_width(title, w)
        x = max(0, (w - display_width(t)) // 2)
        line = pad_to_width(" " * x + t, w)
        if not force and self._title_cache == (line, attr):
            return
        self._title_cache = (line, attr)
        _safe_addstr(self.win, 0, 0, line, attr)
        try:
            self.win.noutrefresh()
        except curses.error:
            return

    def draw_inner_rows(self, rows: List[Tuple[str, int]], *, fill_attr: int = 0, force: bool = False) -> None:
        if self.inner is None:
            return
        inner_h, inner_w = self.inner_size
        if inner_h <= 0 or inner_w <= 0:
            return
        if len(self._inner_cache) != inner_h:
            self._inner_cache = [("", -1) for _ in range(inner_h)]
            force = True
        changed = force
        for i in range(inner_h):
            s, attr = rows[i] if i < len(rows) else ("", fill_attr)
            s = pad_to_width(s, inner_w)
            if not force and self._inner_cache[i] == (s, attr):
                continue
            _safe_addstr(self.inner, i, 0, s, attr)
            self._inner_cache[i] = (s, attr)
            changed = True
        if changed:
            try:
                self.inner.noutrefresh()
            except curses.error:
                return


def _list_pane_rows(widget: ListWidget, viewport: ListViewport, view_h: int) -> List[Tuple[str, int]]:
    viewport.ensure_visible(widget.selected, view_h, len(widget.rows))
    visible = widget.rows[viewport.scroll : viewport.scroll + view_h]
    return [(row.text, row.attr) for row in visible]


def _detail_pane_rows(widget: Paragraph, inner_w: int) -> List[Tuple[str, int]]:
    # One column of horizontal padding on each side.
    text_w = max(0, inner_w - 2)
    return [(" " + ln, widget.attr) for ln in wrap_text(widget.text, text_w)]


class _Renderer:
    """Paints a `Frame` onto persistent curses windows."""

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self._max_yx: Optional[Tuple[int, int]] = None
        self.layout: Optional[Layout] = None
        self.header: Optional[_Pane] = None
        self.list_pane: Optional[_Pane] = None
        self.detail: Optional[_Pane] = None
        self.footer: Optional[_Pane] = None
        self.viewport = ListViewport()

    def ensure(self) -> bool:
        """Rebuild windows when the terminal size changed. Returns True if rebuilt."""
        max_y, max_x = self.stdscr.getmaxyx()
        if self._max_yx == (max_y, max_x):
            return False
        try:
            self.stdscr.erase()
            self.stdscr.noutrefresh()
        except curses.error:
            pass
        self._max_yx = (max_y, max_x)
        self.layout = compute_layout(max_y, max_x)
        self.header = _Pane(self.stdscr, self.layout.header)
        self.list_pane = _Pane(self.stdscr, self.layout.list)
        self.detail = _Pane(self.stdscr, self.layout.detail)
        self.footer = _Pane(self.stdscr, self.layout.footer, titled=False)
        return True

    def paint(self, frame: Frame) -> None:
        force = self.ensure()
        if self.header is None or self.list_pane is None or self.detail is None or self.footer is None:
            return

        self.header.draw_title(frame.header.text, frame.header.attr, force=force)
        self.header.draw_inner_rows([], force=force)

        self.list_pane.draw_title(frame.list.title, frame.header.attr, force=force)
        view_h, _ = self.list_pane.inner_size
        self.list_pane.draw_inner_rows(
            _list_pane_rows(frame.list, self.viewport, view_h), force=force
        )

        self.detail.draw_title(frame.detail.title, frame.header.attr, force=force)
        _, detail_w = self.detail.inner_size
        self.detail.draw_inner_rows(
            _detail_pane_rows(frame.detail, detail_w), fill_attr=frame.detail.attr, force=force
        )

        _, footer_w = self.footer.inner_size
        text = truncate_to_width(frame.footer.text, footer_w)
        pad = max(0, (footer_w - display_width(text)) // 2)
        self.footer.draw_inner_rows([(" " * pad + text, frame.footer.attr)], force=force)

        curses.doupdate()


def _parse_csi_tilde_number(seq: str) -> Optional[int]:
    # "[5~" / "[6;2~" -> 5 / 6
    if not (seq.startswith("[") and seq.endswith("~")):
        return None
    body = seq[1:-1].split(";", 1)[0]
    if not body.isdigit():
        return None
    return int(body)


def _esc_sequence_complete(seq: str) -> bool:
    if len(seq) < 2 or seq[0] not in "[O":
        return False
    if seq[0] == "O":
        return True
    # CSI: parameters/intermediates end with a final byte in @..~
    return "@" <= seq[-1] <= "~" and seq[-1] != "["


def _map_esc_sequence(seq: str) -> Optional[int]:
    arrows = {
        "A": curses.KEY_UP,
        "B": curses.KEY_DOWN,
        "C": curses.KEY_RIGHT,
        "D": curses.KEY_LEFT,
        "H": curses.KEY_HOME,
        "F": curses.KEY_END,
    }
    if len(seq) == 2 and seq[0] in "[O" and seq[1] in arrows:
        return arrows[seq[1]]
    num = _parse_csi_tilde_number(seq)
    if num in (1, 7):
        return curses.KEY_HOME
    if num in (4, 8):
        return curses.KEY_END
    if num == 5:
        return curses.KEY_PPAGE
    if num == 6:
        return curses.KEY_NPAGE
    return None


def _decode_esc_sequence(win: "curses.window", *, timeout_ms: int = 25, restore_timeout_ms: int = -1) -> int:
    """
    Decode the bytes following ESC on terminals whose keys keypad mode did not
    translate.

    A lone ESC is returned as ESC. ESC followed by an ordinary key (Alt+key)
    pushes that key back and returns ESC. A sequence that is incomplete or
    unknown raises InputError.
    """
    win.timeout(timeout_ms)
    try:
        first = win.getch()
        if first == -1:
            return _ESC
        if first not in (ord("["), ord("O")):
            curses.ungetch(first)
            return _ESC
        seq = chr(first)
        while not _esc_sequence_complete(seq) and len(seq) < 8:
            ch = win.getch()
            if ch == -1:
                raise InputError(f"incomplete escape sequence: ESC{seq!r}")
            if not (0 <= ch < 128):
                raise InputError(f"malformed escape sequence: ESC{seq!r} + {ch}")
            seq += chr(ch)
    finally:
        win.timeout(restore_timeout_ms)
    key = _map_esc_sequence(seq)
    if key is None:
        raise InputError(f"unknown escape sequence: ESC{seq!r}")
    return key


def read_key_event(win: "curses.window") -> Optional[KeyEvent]:
    """
    Block for one key press and return it as a KeyEvent.

    Returns None for resize notifications and malformed input.
    """
    win.timeout(-1)
    ch = win.getch()
    if ch == -1 or ch == curses.KEY_RESIZE:
        return None
    if ch == _ESC:
        try:
            ch = _decode_esc_sequence(win)
        except InputError:
            return None
    return KeyEvent(ch)


def run_app(
    stdscr: "curses.window",
    catalog: FunctionCatalog,
    *,
    style: Optional[Style] = None,
    read_event: Callable[["curses.window"], Optional[KeyEvent]] = read_key_event,
) -> SelectionState:
    """
    Browse `catalog` until the exit key is pressed; returns the final selection.

    Each iteration renders the current state, waits for one event and applies
    at most one transition. The exit flag is checked at the top of the loop.
    """
    try:
        curses.curs_set(0)
    except Exception:
        # Some terminals (or TERM/terminfo combinations) don't support this.
        pass
    stdscr.keypad(True)
    if style is None:
        style = init_style()

    renderer = _Renderer(stdscr)
    state = SelectionState()
    should_exit = False
    while not should_exit:
        renderer.paint(render(catalog, state, style))
        event = read_event(stdscr)
        if event is None:
            continue
        action = action_for_event(event)
        if action is None:
            continue
        if action is Action.EXIT:
            should_exit = True
            continue
        state = transition(state, action, len(catalog))
    return state
