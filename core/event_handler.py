"""Terminal key translation and dispatch for typedrill."""

import curses
import logging
from dataclasses import dataclass
from typing import Optional, Union

from core.typing_engine import TypingEngine

log = logging.getLogger("typedrill.event_handler")

ESCAPE = "\x1b"
BACKSPACE_CHARS = ("\x7f", "\b")


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard event."""
    kind: str  # 'char', 'backspace', 'exit' or 'ignored'
    char: Optional[str] = None


def translate_key(key: Union[str, int]) -> KeyEvent:
    """Translate a curses ``get_wch()`` result into a KeyEvent.

    Args:
        key: A character string, or an int keycode for function keys

    Returns:
        KeyEvent describing what the engine should do
    """
    if isinstance(key, int):
        if key == curses.KEY_BACKSPACE:
            return KeyEvent('backspace')
        return KeyEvent('ignored')

    if key in BACKSPACE_CHARS:
        return KeyEvent('backspace')
    if key == ESCAPE:
        return KeyEvent('exit')
    if len(key) == 1 and key.isascii() and key.isprintable():
        return KeyEvent('char', key)

    return KeyEvent('ignored')


def dispatch(engine: TypingEngine, event: KeyEvent) -> bool:
    """Apply a key event to the engine.

    Args:
        engine: Engine receiving the keystroke
        event: Translated key event

    Returns:
        True if the event reached the engine, False otherwise
    """
    if event.kind == 'char':
        engine.handle_char(event.char)
        return True
    if event.kind == 'backspace':
        engine.handle_backspace()
        return True

    if event.kind == 'ignored':
        log.debug("Ignoring non-printable key")
    return False
