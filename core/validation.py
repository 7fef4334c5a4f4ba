"""Validation helpers for typedrill."""

import logging

log = logging.getLogger("typedrill.validation")


class TargetTextError(ValueError):
    """Target text cannot be indexed one byte per character."""


def validate_target_text(text: str) -> str:
    """Check that a target phrase is usable by the typing engine.

    The engine indexes the phrase one character per position, so only
    printable ASCII (including the space) is accepted.

    Args:
        text: Candidate target phrase

    Returns:
        The unchanged text

    Raises:
        TargetTextError: If the text is empty or contains an unsupported character
    """
    if not isinstance(text, str):
        raise TargetTextError(f"Target text must be a string, got {type(text).__name__}")
    if not text:
        raise TargetTextError("Target text must not be empty")

    for index, char in enumerate(text):
        if not (char.isascii() and char.isprintable()):
            raise TargetTextError(
                f"Unsupported character {char!r} at index {index}: "
                "target text must be printable ASCII"
            )

    return text


def validate_elapsed_sec(start: float, now: float) -> float:
    """Calculate elapsed time, ensuring non-negative result.

    Args:
        start: Start reading of the session clock (s)
        now: Current reading of the session clock (s)

    Returns:
        Elapsed seconds (non-negative)
    """
    elapsed = now - start
    if elapsed < 0:
        log.warning(f"Negative elapsed time: {elapsed}s (start={start}, now={now})")
        return 0.0

    return elapsed
