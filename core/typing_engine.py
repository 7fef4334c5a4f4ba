"""Typing engine: classifies keystrokes against a fixed target phrase."""

import logging
import time
from typing import Callable, Dict, List, Optional, Set

from core.models import (
    CharStatus,
    EngineMode,
    EngineSnapshot,
    RenderedChar,
    SessionSummary,
)
from core.validation import validate_elapsed_sec, validate_target_text
from core.wpm_calculator import calculate_wpm, count_words

log = logging.getLogger("typedrill.typing_engine")


class TypingEngine:
    """Tracks how a stream of keystrokes lines up with the target text.

    State is a cursor into the text plus three sparse overlays:

    - ``mismatches``: indices passed with a wrong character
    - ``extensions``: extra characters typed where the text expects a space,
      keyed by the index of that space
    - ``skips``: skipped regions, start index keyed by end index

    Keystrokes only mutate state through :meth:`handle_char` and
    :meth:`handle_backspace`.
    """

    def __init__(self, text: str, clock: Callable[[], float] = time.monotonic):
        """Initialize typing engine.

        Args:
            text: Target phrase, printable ASCII only
            clock: Monotonic time source in seconds

        Raises:
            TargetTextError: If the text cannot be indexed per character
        """
        self._text = validate_target_text(text)
        self._clock = clock
        self._start: Optional[float] = None
        self._cursor = 0

        self._mismatches: Set[int] = set()
        self._extensions: Dict[int, str] = {}
        self._skips: Dict[int, int] = {}

        self._keystroke_count = 0
        self._backspace_count = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def mismatches(self) -> frozenset:
        return frozenset(self._mismatches)

    @property
    def extensions(self) -> Dict[int, str]:
        return dict(self._extensions)

    @property
    def skips(self) -> Dict[int, int]:
        return dict(self._skips)

    @property
    def started(self) -> bool:
        return self._start is not None

    @property
    def keystroke_count(self) -> int:
        """Characters that changed the engine state."""
        return self._keystroke_count

    @property
    def backspace_count(self) -> int:
        """Backspaces that changed the engine state."""
        return self._backspace_count

    @property
    def mode(self) -> EngineMode:
        """Current engine mode, derived from cursor and extensions."""
        if self._cursor >= len(self._text):
            return EngineMode.COMPLETE
        if self._cursor in self._extensions:
            return EngineMode.IN_EXTENSION
        return EngineMode.NORMAL

    def handle_char(self, char: str) -> None:
        """Process a printable character keystroke.

        Args:
            char: The typed character

        Raises:
            ValueError: If more or less than one character is given
        """
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")

        mode = self.mode
        if mode == EngineMode.COMPLETE:
            log.debug(f"Ignoring {char!r}: text already complete")
            return

        if self._start is None:
            self._start = self._clock()
            log.debug("Session clock started")

        self._keystroke_count += 1

        # A pending extension captures every keystroke, spaces included
        if mode == EngineMode.IN_EXTENSION:
            self._extensions[self._cursor] += char
            log.debug(f"Extended at {self._cursor}: {self._extensions[self._cursor]!r}")
            return

        self._process_normal_char(char)

    def _process_normal_char(self, char: str) -> None:
        """Resolve a keystroke when no extension is pending.

        Args:
            char: The typed character
        """
        target = self._text[self._cursor]

        if char == " " and target != " ":
            self._skip_word()
            return

        if char == target:
            self._cursor += 1
            return

        if target == " ":
            self._extensions[self._cursor] = char
            log.debug(f"Extension started at {self._cursor}: {char!r}")
            return

        self._mismatches.add(self._cursor)
        log.debug(f"Mismatch at {self._cursor}: typed {char!r}, expected {target!r}")
        self._cursor += 1

    def _skip_word(self) -> None:
        """Jump past the rest of the current word and its trailing space."""
        boundary = self._text.find(" ", self._cursor)
        if boundary == -1:
            boundary = len(self._text) - 1

        self._skips[boundary] = self._cursor
        log.debug(f"Skipped {self._cursor}..{boundary}")
        self._cursor = boundary + 1

    def handle_backspace(self) -> None:
        """Undo the most recent classification."""
        if self.mode == EngineMode.IN_EXTENSION:
            self._backspace_count += 1
            extension = self._extensions[self._cursor][:-1]
            if extension:
                self._extensions[self._cursor] = extension
            else:
                del self._extensions[self._cursor]
            return

        if self._cursor == 0:
            return
        self._backspace_count += 1

        # Keyed by the boundary space, or by the last index for a skip
        # that ran off the end of the text
        previous = self._cursor - 1
        if previous in self._skips:
            self._cursor = self._skips.pop(previous)
            log.debug(f"Undid skip {self._cursor}..{previous}")
            return

        self._cursor = previous
        self._mismatches.discard(self._cursor)

    def is_complete(self) -> bool:
        """Check whether the whole text has been consumed."""
        return self._cursor == len(self._text)

    def elapsed_sec(self) -> Optional[float]:
        """Seconds since the first keystroke, or None before it."""
        if self._start is None:
            return None
        return validate_elapsed_sec(self._start, self._clock())

    def elapsed_wpm(self) -> Optional[float]:
        """Live words per minute over the text before the cursor.

        Returns:
            WPM, or None if no keystroke has been handled yet
        """
        elapsed = self.elapsed_sec()
        if elapsed is None:
            return None
        return calculate_wpm(count_words(self._text[: self._cursor]), elapsed)

    def render_chars(self) -> List[RenderedChar]:
        """Classify every target position for display.

        Returns:
            One RenderedChar per index of the target text
        """
        skip_ranges = [range(start, end + 1) for end, start in self._skips.items()]
        rendered = []

        for index, char in enumerate(self._text):
            extension = self._extensions.get(index, "")
            if extension:
                status = CharStatus.EXTENSION
            elif index < self._cursor:
                if index in self._mismatches or any(
                    index in skip_range for skip_range in skip_ranges
                ):
                    status = CharStatus.INCORRECT
                else:
                    status = CharStatus.CORRECT
            elif index == self._cursor:
                status = CharStatus.CURSOR
            else:
                status = CharStatus.PENDING

            rendered.append(
                RenderedChar(index=index, char=char, status=status, extension=extension)
            )

        return rendered

    def snapshot(self) -> EngineSnapshot:
        """Copy the current state into an immutable model."""
        return EngineSnapshot(
            cursor=self._cursor,
            mismatches=frozenset(self._mismatches),
            extensions=dict(self._extensions),
            skips=dict(self._skips),
            mode=self.mode,
            started=self.started,
        )

    def summary(self) -> SessionSummary:
        """Build the closing report for this session."""
        incorrect = sum(
            1 for rendered in self.render_chars() if rendered.status == CharStatus.INCORRECT
        )
        elapsed = self.elapsed_sec()

        return SessionSummary(
            text_length=len(self._text),
            cursor=self._cursor,
            completed=self.is_complete(),
            elapsed_sec=elapsed or 0.0,
            wpm=self.elapsed_wpm(),
            words_typed=count_words(self._text[: self._cursor]),
            mismatch_count=len(self._mismatches),
            skipped_words=len(self._skips),
            incorrect_chars=incorrect,
            keystrokes=self._keystroke_count,
            backspaces=self._backspace_count,
        )
