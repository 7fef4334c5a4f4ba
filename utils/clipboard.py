"""Clipboard utilities for Wayland and X11."""

import logging
import os
import subprocess
from typing import Optional

log = logging.getLogger("typedrill.clipboard")

WAYLAND_PASTE = ["wl-paste", "--no-newline"]
X11_PASTE = ["xclip", "-selection", "clipboard", "-o"]


def _run_paste_command(command: list[str]) -> Optional[str]:
    """Run a clipboard paste command.

    Args:
        command: Command line to run

    Returns:
        Clipboard content as string, or None if empty/failed
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=5,
            check=False
        )

        if result.returncode == 0 and result.stdout.strip():
            content = result.stdout.strip()
            log.debug(f"Got clipboard content via {command[0]}: {len(content)} chars")
            return content
        return None

    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        log.warning(f"{command[0]} failed: {e}")
        return None


def is_wayland() -> bool:
    """Detect if running on Wayland."""
    return os.environ.get("WAYLAND_DISPLAY") is not None or \
           os.environ.get("XDG_SESSION_TYPE") == "wayland"


def get_clipboard_content() -> Optional[str]:
    """Get clipboard content with the tool matching the session type.

    Returns:
        Clipboard content as string, or None if empty/failed
    """
    if is_wayland():
        return _run_paste_command(WAYLAND_PASTE)
    return _run_paste_command(X11_PASTE)
