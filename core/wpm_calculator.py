"""WPM calculation utilities."""


def count_words(text: str) -> int:
    """Count whitespace-delimited words.

    Args:
        text: Text to count words in

    Returns:
        Number of words (runs of whitespace never produce empty words)
    """
    return len(text.split())


def calculate_wpm(word_count: int, duration_s: float) -> float:
    """Calculate words per minute.

    Args:
        word_count: Number of completed or partial words typed
        duration_s: Duration in seconds

    Returns:
        WPM (words per minute), or 0.0 if duration is zero or negative
    """
    if duration_s <= 0:
        return 0.0

    minutes = duration_s / 60.0
    return word_count / minutes
