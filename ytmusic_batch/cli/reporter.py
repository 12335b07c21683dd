"""
Status reporting for user-facing progress lines.

The batch runner and the tool provisioner receive a reporter instead of
writing to the console directly, so the same code can print colored output,
plain text, or nothing at all (in tests).
"""

import sys
from typing import Protocol, TextIO

from rich.console import Console
from rich.markup import escape


class StatusReporter(Protocol):
    """Sink for one-line status messages."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class RichStatusReporter:
    """Writes colored status lines through a Rich console."""

    STYLES = {
        "info": "yellow",
        "success": "green",
        "warning": "bold yellow",
        "error": "red",
    }

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def _print(self, kind: str, message: str) -> None:
        # Messages contain URLs and file paths, which must not be read as markup
        self.console.print(escape(message), style=self.STYLES[kind], highlight=False)

    def info(self, message: str) -> None:
        self._print("info", message)

    def success(self, message: str) -> None:
        self._print("success", message)

    def warning(self, message: str) -> None:
        self._print("warning", message)

    def error(self, message: str) -> None:
        self._print("error", message)


class PlainStatusReporter:
    """Writes uncolored status lines, prefixed with their level."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def _write(self, prefix: str, message: str) -> None:
        self.stream.write(f"{prefix}{message}\n")
        self.stream.flush()

    def info(self, message: str) -> None:
        self._write("", message)

    def success(self, message: str) -> None:
        self._write("OK: ", message)

    def warning(self, message: str) -> None:
        self._write("WARNING: ", message)

    def error(self, message: str) -> None:
        self._write("ERROR: ", message)
