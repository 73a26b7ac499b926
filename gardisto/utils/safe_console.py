"""Rich Console that degrades to ASCII on non-UTF-8 terminals."""
from rich.console import Console
from rich.markup import escape
from typing import Any
from .logger import sanitize_for_terminal, is_utf8_capable


class SafeConsole(Console):
    """Console wrapper that sanitizes Unicode output for limited terminals.

    File paths and messages coming from scanned code are printed through
    print_plain() so brackets in them are never read as rich markup.
    """

    def __init__(self, *args, **kwargs):
        self._needs_sanitization = not is_utf8_capable()
        if self._needs_sanitization:
            kwargs['legacy_windows'] = True
        super().__init__(*args, **kwargs)

    def print(self, *objects: Any, **kwargs) -> None:
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)

    def print_plain(self, text: str, style: str = None) -> None:
        """Print text verbatim (markup escaped), optionally styled."""
        self.print(escape(text), style=style, highlight=False)

    def status(self, *args, **kwargs):
        if self._needs_sanitization:
            kwargs['spinner'] = 'line'  # ASCII spinner: - \ | /
        return super().status(*args, **kwargs)
