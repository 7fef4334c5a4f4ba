"""Pydantic models for typedrill data structures."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CharStatus(str, Enum):
    """Classification of one target text position for rendering."""

    PENDING = "pending"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURSOR = "cursor"
    EXTENSION = "extension"


class EngineMode(str, Enum):
    """Which transition table the engine applies to the next keystroke."""

    NORMAL = "normal"
    IN_EXTENSION = "in_extension"
    COMPLETE = "complete"


class RenderedChar(BaseModel):
    """Single target character with its classification."""

    index: int = Field(..., ge=0, description="Index into the target text")
    char: str = Field(..., min_length=1, max_length=1, description="Target character")
    status: CharStatus = Field(..., description="Rendering classification")
    extension: str = Field(
        default="", description="Extra characters typed before this position"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def width(self) -> int:
        """Number of terminal cells this position occupies."""
        return len(self.extension) + 1


class EngineSnapshot(BaseModel):
    """Immutable copy of the engine's mutable state."""

    cursor: int = Field(..., ge=0, description="Next index expected to match")
    mismatches: frozenset[int] = Field(
        default_factory=frozenset, description="Indices passed with a wrong character"
    )
    extensions: dict[int, str] = Field(
        default_factory=dict, description="Inserted characters keyed by space index"
    )
    skips: dict[int, int] = Field(
        default_factory=dict, description="Skip start index keyed by skip end index"
    )
    mode: EngineMode = Field(..., description="Current engine mode")
    started: bool = Field(default=False, description="Whether the clock is running")

    model_config = ConfigDict(frozen=True)

    def state_key(self) -> tuple:
        """Cursor and overlays only, for comparing classification state."""
        return (
            self.cursor,
            self.mismatches,
            tuple(sorted(self.extensions.items())),
            tuple(sorted(self.skips.items())),
        )


class SessionSummary(BaseModel):
    """Closing report for one typing session."""

    text_length: int = Field(..., ge=0, description="Length of the target text")
    cursor: int = Field(..., ge=0, description="Final cursor position")
    completed: bool = Field(..., description="Whether the whole text was typed")
    elapsed_sec: float = Field(default=0.0, ge=0, description="Session duration (s)")
    wpm: float | None = Field(default=None, description="Words per minute, if started")
    words_typed: int = Field(default=0, ge=0, description="Words before the cursor")
    mismatch_count: int = Field(default=0, ge=0, description="Wrong characters left")
    skipped_words: int = Field(default=0, ge=0, description="Skips left in place")
    incorrect_chars: int = Field(
        default=0, ge=0, description="Consumed positions rendered as incorrect"
    )
    keystrokes: int = Field(default=0, ge=0, description="Characters handled")
    backspaces: int = Field(default=0, ge=0, description="Backspaces handled")

    model_config = ConfigDict(frozen=True)

    @property
    def accuracy(self) -> float:
        """Share of consumed positions that were typed correctly (0-100)."""
        if self.cursor == 0:
            return 100.0
        return 100.0 * (self.cursor - self.incorrect_chars) / self.cursor
