"""
Cursor state for the function list and the transitions that move it.

The cursor is either None (nothing selected) or a valid index into the
catalog. An empty catalog always has cursor None.
"""

from __future__ import annotations

import curses
import enum
from dataclasses import dataclass
from typing import Dict, Optional


class Action(enum.Enum):
    DESELECT = "deselect"
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"
    EXIT = "exit"


class KeyKind(enum.Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    code: int
    kind: KeyKind = KeyKind.PRESS


@dataclass(frozen=True)
class SelectionState:
    cursor: Optional[int] = None

    @property
    def has_selection(self) -> bool:
        return self.cursor is not None


_ESC = 27

KEY_BINDINGS: Dict[int, Action] = {
    ord("q"): Action.EXIT,
    _ESC: Action.EXIT,
    ord("h"): Action.DESELECT,
    curses.KEY_LEFT: Action.DESELECT,
    ord("j"): Action.NEXT,
    curses.KEY_DOWN: Action.NEXT,
    ord("k"): Action.PREVIOUS,
    curses.KEY_UP: Action.PREVIOUS,
    ord("g"): Action.FIRST,
    curses.KEY_HOME: Action.FIRST,
    ord("G"): Action.LAST,
    curses.KEY_END: Action.LAST,
}


def action_for_event(event: KeyEvent) -> Optional[Action]:
    """
    Map a key event to an action.

    Only presses count: terminals that report press and release (or auto-repeat)
    for one keystroke would otherwise step the cursor twice.
    """
    if event.kind is not KeyKind.PRESS:
        return None
    return KEY_BINDINGS.get(event.code)


def transition(state: SelectionState, action: Action, n_items: int) -> SelectionState:
    if n_items <= 0:
        return SelectionState()
    last = n_items - 1
    cur = state.cursor
    if cur is not None and not (0 <= cur <= last):
        cur = min(max(cur, 0), last)

    if action is Action.DESELECT:
        return SelectionState()
    if action is Action.NEXT:
        return SelectionState(0 if cur is None else min(cur + 1, last))
    if action is Action.PREVIOUS:
        return SelectionState(last if cur is None else max(cur - 1, 0))
    if action is Action.FIRST:
        return SelectionState(0)
    if action is Action.LAST:
        return SelectionState(last)
    # EXIT stops the controller loop; the cursor itself is unchanged.
    return SelectionState(cur)
