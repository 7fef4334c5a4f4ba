"""Curses view of the typing engine state."""

import curses
import logging
from typing import List, Optional, Sequence

from core.models import CharStatus, EngineSnapshot, RenderedChar
from core.typing_engine import TypingEngine
from utils.config import TrainerSettings

log = logging.getLogger("typedrill.terminal_view")

PAIR_CORRECT = 1
PAIR_INCORRECT = 2
PAIR_CURSOR = 3

TEXT_ROW = 2


def format_wpm(wpm: Optional[float], decimals: int = 2) -> str:
    """Format the WPM line.

    Args:
        wpm: Current WPM, or None before the first keystroke
        decimals: Decimal places to show

    Returns:
        Text for the WPM line
    """
    if wpm is None:
        return "Start typing"
    return f"{wpm:.{decimals}f} wpm"


def format_snapshot(snapshot: EngineSnapshot) -> str:
    """One-line dump of the engine state for the debug line."""
    return (
        f"mode={snapshot.mode.value} cursor={snapshot.cursor} "
        f"mismatches={sorted(snapshot.mismatches)} "
        f"extensions={dict(sorted(snapshot.extensions.items()))} "
        f"skips={dict(sorted(snapshot.skips.items()))}"
    )


def wrap_rendered(chars: Sequence[RenderedChar], width: int) -> List[List[RenderedChar]]:
    """Split rendered characters into display lines.

    Lines break after spaces where possible; a word wider than the whole
    line is broken wherever it runs out of room.

    Args:
        chars: Rendered projection of the target text
        width: Available terminal columns

    Returns:
        Lines of rendered characters, each at most ``width`` cells wide
        (a single over-wide extension cell may exceed it)
    """
    width = max(width, 1)

    words: List[List[RenderedChar]] = []
    current: List[RenderedChar] = []
    for rendered in chars:
        current.append(rendered)
        if rendered.char == " ":
            words.append(current)
            current = []
    if current:
        words.append(current)

    lines: List[List[RenderedChar]] = []
    line: List[RenderedChar] = []
    line_width = 0
    for word in words:
        word_width = sum(rendered.width for rendered in word)
        if line and line_width + word_width > width:
            lines.append(line)
            line, line_width = [], 0

        for rendered in word:
            if line and line_width + rendered.width > width:
                lines.append(line)
                line, line_width = [], 0
            line.append(rendered)
            line_width += rendered.width

    if line:
        lines.append(line)
    return lines


class TerminalView:
    """Draws the WPM line and the coloured target text."""

    def __init__(self, stdscr, settings: TrainerSettings):
        """Initialize view and curses colour pairs.

        Args:
            stdscr: Curses window from ``curses.wrapper``
            settings: Trainer settings (colours, decimals, debug line)
        """
        self.stdscr = stdscr
        self.settings = settings

        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(PAIR_CORRECT, self._color(settings.correct_color), -1)
        curses.init_pair(PAIR_INCORRECT, self._color(settings.incorrect_color), -1)
        curses.init_pair(PAIR_CURSOR, curses.COLOR_BLACK, curses.COLOR_WHITE)
        curses.curs_set(0)

    @staticmethod
    def _color(name: str) -> int:
        return getattr(curses, f"COLOR_{name.upper()}")

    def _attr(self, status: CharStatus) -> int:
        if status == CharStatus.CORRECT:
            return curses.color_pair(PAIR_CORRECT)
        if status in (CharStatus.INCORRECT, CharStatus.EXTENSION):
            return curses.color_pair(PAIR_INCORRECT)
        if status == CharStatus.CURSOR:
            return curses.color_pair(PAIR_CURSOR)
        return curses.A_NORMAL

    def _put(self, row: int, col: int, text: str, attr: int = 0) -> None:
        """Write text, clipping at the window edge."""
        try:
            self.stdscr.addstr(row, col, text, attr)
        except curses.error:
            log.debug(f"Clipped draw at row={row} col={col}")

    def render(self, engine: TypingEngine) -> None:
        """Redraw the whole screen from the engine state.

        Args:
            engine: Engine to display
        """
        _, width = self.stdscr.getmaxyx()
        self.stdscr.erase()

        self._put(0, 0, format_wpm(engine.elapsed_wpm(), self.settings.wpm_decimals))

        lines = wrap_rendered(engine.render_chars(), width - 1)
        for offset, line in enumerate(lines):
            col = 0
            for rendered in line:
                self._put(TEXT_ROW + offset, col, rendered.extension + rendered.char,
                          self._attr(rendered.status))
                col += rendered.width

        if self.settings.show_state:
            self._put(TEXT_ROW + len(lines) + 1, 0,
                      format_snapshot(engine.snapshot())[: max(width - 1, 0)],
                      curses.A_DIM)

        self.stdscr.refresh()
