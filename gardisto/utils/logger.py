"""Leveled logging for the checker, with ASCII fallback for limited terminals.

The checker only ever sees a plain callable `log(level, message)`. The CLI
builds one with create_logger() that writes through a rich SafeConsole.
"""
import sys
import locale
from enum import Enum
from typing import Callable, Optional
from rich.markup import escape


class LogLevel(str, Enum):
    DEBUG = 'debug'
    INFO = 'info'
    WARN = 'warn'
    ERROR = 'error'


Logger = Callable[[LogLevel, str], None]

# Unicode to ASCII mapping for terminals without UTF-8
ICON_MAP = {
    '✓': '[OK]',
    '✔': '[OK]',
    '✗': '[FAIL]',
    '✘': '[FAIL]',
    '⚠': '[WARN]',
    '→': '->',
    '…': '...',
    '•': '*',
}

LEVEL_STYLES = {
    LogLevel.DEBUG: 'dim',
    LogLevel.INFO: 'cyan',
    LogLevel.WARN: 'yellow',
    LogLevel.ERROR: 'bold red',
}

# Levels printed even when debug mode is off
ALWAYS_SHOWN = {LogLevel.WARN, LogLevel.ERROR}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if hasattr(sys.stdout, 'encoding') and sys.stdout.encoding:
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (LookupError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding() in ('utf-8', 'utf8', 'utf_8')


def sanitize_for_terminal(text: str) -> str:
    """Replace Unicode icons with ASCII equivalents if terminal doesn't support UTF-8."""
    if is_utf8_capable():
        return text

    sanitized = text
    for unicode_char, ascii_replacement in ICON_MAP.items():
        sanitized = sanitized.replace(unicode_char, ascii_replacement)
    return sanitized


def create_logger(debug: bool, console=None) -> Logger:
    """Build a log(level, message) sink.

    Args:
        debug: Print debug and info messages too
        console: rich Console to write to (stderr SafeConsole by default)

    Returns:
        Logger callable
    """
    if console is None:
        from gardisto.utils.safe_console import SafeConsole
        console = SafeConsole(stderr=True)

    def log(level: LogLevel, message: str) -> None:
        level = LogLevel(level)
        if not debug and level not in ALWAYS_SHOWN:
            return
        style = LEVEL_STYLES[level]
        tag = escape(f"[{level.value.upper()}]")
        console.print(f"[{style}]{tag}[/{style}] {escape(message)}",
                      markup=True, highlight=False)

    return log


def null_logger(level: LogLevel, message: str) -> None:
    """Discard everything."""


def describe_error(error: Optional[BaseException]) -> str:
    """One-line description of an exception for log output."""
    if error is None:
        return 'unknown error'
    return str(error) or type(error).__name__
