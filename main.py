#!/usr/bin/env python3
"""typedrill - terminal typing speed trainer.

Usage:
    typedrill
    typedrill "Your practice text here"
    typedrill --file path/to/text.txt
    echo "text" | typedrill --file -
    typedrill --clipboard --debug
    typedrill --set wpm_decimals=1 --set correct_color=cyan
    typedrill --show-config
"""

import argparse
import curses
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.event_handler import dispatch, translate_key
from core.models import SessionSummary
from core.typing_engine import TypingEngine
from core.validation import TargetTextError
from ui.terminal_view import TerminalView
from utils.config import Config, TrainerSettings
from utils.text_source import resolve_text

log = logging.getLogger('typedrill')

EXIT_COMPLETED = 0
EXIT_ABORTED = 1
EXIT_USAGE = 2


def setup_logging(level: str = 'INFO') -> Path:
    """Log to a rotating file in the XDG state directory.

    Nothing is logged to the terminal, which curses owns during a session.

    Args:
        level: Logging level name

    Returns:
        Path of the log file
    """
    xdg_state_home = os.environ.get('XDG_STATE_HOME', str(Path.home() / '.local' / 'state'))
    log_dir = Path(xdg_state_home) / 'typedrill'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / 'typedrill.log'

    # Configure rotating file handler (5MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=5
    )

    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[file_handler],
        force=True,
    )
    return log_file


def run_session(stdscr, engine: TypingEngine, settings: TrainerSettings) -> bool:
    """Feed terminal keys to the engine until completion or Escape.

    Args:
        stdscr: Curses window from ``curses.wrapper``
        engine: Engine for this session
        settings: Trainer settings

    Returns:
        True if the text was completed, False if the user quit
    """
    view = TerminalView(stdscr, settings)
    view.render(engine)

    while True:
        try:
            key = stdscr.get_wch()
        except curses.error as e:
            log.debug(f"get_wch failed: {e}")
            continue

        event = translate_key(key)
        if event.kind == 'exit':
            log.info("Session aborted by user")
            return False

        dispatch(engine, event)
        view.render(engine)

        if engine.is_complete():
            log.info("Text complete")
            return True


def format_summary(summary: SessionSummary, decimals: int = 2) -> str:
    """Format the closing report printed after the session."""
    if summary.wpm is None:
        return "No keys typed."

    status = "Completed" if summary.completed else "Stopped"
    lines = [
        f"{status} {summary.cursor}/{summary.text_length} characters "
        f"in {summary.elapsed_sec:.1f}s",
        f"Speed:     {summary.wpm:.{decimals}f} wpm ({summary.words_typed} words)",
        f"Accuracy:  {summary.accuracy:.1f}%",
        f"Mistakes:  {summary.mismatch_count} mismatched, "
        f"{summary.skipped_words} skipped",
        f"Keys:      {summary.keystrokes} typed, {summary.backspaces} backspaces",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='typedrill',
        description="Type a phrase and watch your words per minute.",
    )
    parser.add_argument('text', nargs='*', help="Practice text (default: configured phrase)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--file', metavar='PATH', help="Read practice text from file ('-' for stdin)")
    source.add_argument('--clipboard', action='store_true', help="Use the clipboard content")
    parser.add_argument('--debug', action='store_true',
                        help="Show engine state and log every transition")
    parser.add_argument('--config', type=Path, help="Settings file path")
    settings_group = parser.add_mutually_exclusive_group()
    settings_group.add_argument('--set', action='append', metavar='KEY=VALUE',
                                help="Store a setting and exit (repeatable)")
    settings_group.add_argument('--get', metavar='KEY', help="Print one setting and exit")
    settings_group.add_argument('--show-config', action='store_true',
                                help="Print all settings and exit")
    return parser


def manage_settings(config: Config, args: argparse.Namespace) -> int:
    """Handle --set, --get and --show-config.

    Returns:
        Process exit code
    """
    try:
        if args.set:
            for assignment in args.set:
                key, sep, value = assignment.partition('=')
                if not sep:
                    raise ValueError(f"Expected KEY=VALUE, got {assignment!r}")
                config.set(key.strip(), value)
            print(f"Saved {len(args.set)} setting(s) to {config.path}")
        elif args.get:
            print(config.get(args.get))
        else:
            for key, value in config.get_all().items():
                print(f"{key} = {value!r}")
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    return EXIT_COMPLETED


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = Config(args.config)
    settings = config.settings
    if args.debug:
        settings = settings.model_copy(update={'show_state': True, 'log_level': 'DEBUG'})

    log_file = setup_logging(settings.log_level)
    log.info(f"Starting typedrill, log file {log_file}")

    if args.set or args.get or args.show_config:
        return manage_settings(config, args)

    try:
        text = resolve_text(
            args.text,
            settings.default_text,
            filepath=args.file,
            use_clipboard=args.clipboard,
        )
        engine = TypingEngine(text)
    except (FileNotFoundError, TargetTextError) as e:
        log.error(f"Cannot start session: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    # Shorter Escape delay so the exit key responds immediately
    os.environ.setdefault('ESCDELAY', '25')
    completed = curses.wrapper(run_session, engine, settings)

    summary = engine.summary()
    log.info(f"Session finished: {summary.model_dump()}")
    print(format_summary(summary, settings.wpm_decimals))
    return EXIT_COMPLETED if completed else EXIT_ABORTED


if __name__ == '__main__':
    sys.exit(main())
