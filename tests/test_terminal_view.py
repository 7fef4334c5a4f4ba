"""Tests for ui.terminal_view module."""

import curses

import pytest

from core.models import CharStatus, RenderedChar
from core.typing_engine import TypingEngine
from ui import terminal_view
from ui.terminal_view import TerminalView, format_snapshot, format_wpm, wrap_rendered
from utils.config import TrainerSettings


def line_text(line: list[RenderedChar]) -> str:
    return "".join(rendered.extension + rendered.char for rendered in line)


class FakeWindow:
    """Records addstr calls instead of drawing."""

    def __init__(self, height: int = 10, width: int = 20):
        self.height = height
        self.width = width
        self.calls = []
        self.refreshed = False

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.calls = []

    def addstr(self, row, col, text, attr=0):
        if row >= self.height or col + len(text) > self.width:
            raise curses.error("addstr out of range")
        self.calls.append((row, col, text, attr))

    def refresh(self):
        self.refreshed = True


@pytest.fixture
def fake_curses(monkeypatch):
    """Stub curses calls that need an initialised screen."""
    monkeypatch.setattr(curses, "start_color", lambda: None)
    monkeypatch.setattr(curses, "use_default_colors", lambda: None)
    monkeypatch.setattr(curses, "init_pair", lambda *args: None)
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "color_pair", lambda number: number * 256)


class TestFormatWPM:
    """Tests for format_wpm function."""

    def test_before_typing(self):
        """Test the prompt shown before the first key."""
        assert format_wpm(None) == "Start typing"

    def test_two_decimals_by_default(self):
        """Test default formatting."""
        assert format_wpm(42.123) == "42.12 wpm"

    def test_custom_decimals(self):
        """Test configurable decimals."""
        assert format_wpm(42.5, 0) == "42 wpm"


class TestFormatSnapshot:
    """Tests for format_snapshot function."""

    def test_contains_state(self):
        """Test the debug line lists mode, cursor and overlays."""
        engine = TypingEngine("ab cd")
        for char in "xbq":
            engine.handle_char(char)

        line = format_snapshot(engine.snapshot())
        assert "mode=in_extension" in line
        assert "cursor=2" in line
        assert "mismatches=[0]" in line
        assert "extensions={2: 'q'}" in line
        assert "skips={}" in line


class TestWrapRendered:
    """Tests for wrap_rendered function."""

    def test_fits_on_one_line(self):
        """Test short text stays on one line."""
        lines = wrap_rendered(TypingEngine("ab cd").render_chars(), 20)
        assert [line_text(line) for line in lines] == ["ab cd"]

    def test_breaks_after_spaces(self):
        """Test lines break between words."""
        chars = TypingEngine("the quick brown fox").render_chars()
        lines = wrap_rendered(chars, 10)

        assert [line_text(line) for line in lines] == ["the quick ", "brown fox"]

    def test_long_word_broken(self):
        """Test a word wider than the line is split."""
        lines = wrap_rendered(TypingEngine("abcdefgh").render_chars(), 3)
        assert [line_text(line) for line in lines] == ["abc", "def", "gh"]

    def test_extension_width_counted(self):
        """Test extension characters take up room on the line."""
        engine = TypingEngine("ab cd")
        for char in "abxyz":
            engine.handle_char(char)

        lines = wrap_rendered(engine.render_chars(), 6)
        assert [line_text(line) for line in lines] == ["abxyz ", "cd"]

    def test_keeps_every_character(self):
        """Test wrapping neither drops nor repeats positions."""
        chars = TypingEngine("The quick brown fox jumped over the lazy wolves.").render_chars()
        lines = wrap_rendered(chars, 7)

        flattened = [rendered.index for line in lines for rendered in line]
        assert flattened == list(range(len(chars)))

    def test_zero_width_treated_as_one(self):
        """Test a degenerate width still makes progress."""
        lines = wrap_rendered(TypingEngine("ab").render_chars(), 0)
        assert [line_text(line) for line in lines] == ["a", "b"]


class TestTerminalView:
    """Tests for TerminalView drawing."""

    def test_render_draws_wpm_and_text(self, fake_curses):
        """Test the WPM line and one call per character."""
        window = FakeWindow()
        view = TerminalView(window, TrainerSettings())
        engine = TypingEngine("ab")

        view.render(engine)

        assert window.calls[0] == (0, 0, "Start typing", 0)
        assert [call[2] for call in window.calls[1:]] == ["a", "b"]
        assert window.calls[1][3] == terminal_view.PAIR_CURSOR * 256
        assert window.calls[2][3] == curses.A_NORMAL
        assert window.refreshed

    def test_render_colours_by_status(self, fake_curses):
        """Test correct, incorrect and extension cells use their pairs."""
        window = FakeWindow()
        view = TerminalView(window, TrainerSettings())
        engine = TypingEngine("ab cd")
        for char in "xbq":
            engine.handle_char(char)

        view.render(engine)

        text_calls = {call[2]: call[3] for call in window.calls[1:]}
        assert text_calls["a"] == terminal_view.PAIR_INCORRECT * 256
        assert text_calls["b"] == terminal_view.PAIR_CORRECT * 256
        assert text_calls["q "] == terminal_view.PAIR_INCORRECT * 256

    def test_render_state_line(self, fake_curses):
        """Test the debug line is drawn when enabled."""
        window = FakeWindow(width=200)
        view = TerminalView(window, TrainerSettings(show_state=True))

        view.render(TypingEngine("ab"))

        last_row, _, text, attr = window.calls[-1]
        assert last_row == terminal_view.TEXT_ROW + 2
        assert text.startswith("mode=normal")
        assert attr == curses.A_DIM

    def test_render_clips_small_window(self, fake_curses):
        """Test drawing past the window bottom does not raise."""
        window = FakeWindow(height=3, width=4)
        view = TerminalView(window, TrainerSettings())

        view.render(TypingEngine("one two three four"))

        assert all(call[0] < 3 for call in window.calls)

    def test_status_attr_mapping(self, fake_curses):
        """Test every status maps to an attribute."""
        view = TerminalView(FakeWindow(), TrainerSettings())
        for status in CharStatus:
            assert isinstance(view._attr(status), int)
