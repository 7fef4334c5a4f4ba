"""Resolve the practice phrase from files, stdin, clipboard or arguments."""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from utils.clipboard import get_clipboard_content

log = logging.getLogger("typedrill.text_source")


def normalize_text(text: str) -> str:
    """Join non-blank lines with single spaces.

    Spacing inside a line is kept as is; only line structure and
    surrounding whitespace are removed.

    Args:
        text: Raw text, possibly spanning several lines

    Returns:
        Single-line phrase
    """
    lines = [line.strip() for line in text.splitlines()]
    return " ".join(line for line in lines if line)


def get_text_from_file(filepath: str, stdin: Optional[TextIO] = None) -> str:
    """Read text from file, or from stdin when the path is ``-``.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if filepath == "-":
        return (stdin or sys.stdin).read()

    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    return path.read_text()


def resolve_text(
    words: Sequence[str],
    default_text: str,
    filepath: Optional[str] = None,
    use_clipboard: bool = False,
    stdin: Optional[TextIO] = None,
) -> str:
    """Pick the practice phrase.

    Priority: file (or stdin), clipboard, command line words, default.

    Args:
        words: Positional command line words
        default_text: Configured fallback phrase
        filepath: Optional file path, ``-`` for stdin
        use_clipboard: Read the phrase from the clipboard
        stdin: Stream used for ``-`` (defaults to sys.stdin)

    Returns:
        Normalized phrase, possibly empty
    """
    if filepath is not None:
        source = f"file {filepath}"
        text = get_text_from_file(filepath, stdin)
    elif use_clipboard:
        source = "clipboard"
        text = get_clipboard_content() or ""
    elif words:
        source = "arguments"
        text = " ".join(words)
    else:
        source = "settings"
        text = default_text

    text = normalize_text(text)
    log.info(f"Practice text from {source}: {len(text)} chars")
    return text
