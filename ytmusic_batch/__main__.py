"""
Console entry point: runs the Typer app and maps escaping exceptions to
exit codes and an error panel.
"""

import asyncio
import logging
import os
import sys

from rich.console import Console

from ytmusic_batch.cli.app import app
from ytmusic_batch.cli.formatters import render_error_panel
from ytmusic_batch.exceptions import YtMusicBatchError

log = logging.getLogger("ytmusic_batch")


def _use_utf8_streams() -> None:
    # Status lines contain ✓/✗, which the legacy Windows code pages cannot encode
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def _stop(console: Console, error: BaseException, unexpected: bool = False) -> None:
    console.print()
    console.print(render_error_panel(error, unexpected=unexpected))
    raise SystemExit(1)


def main() -> None:
    if os.name == "nt":
        _use_utf8_streams()

    console = Console()
    try:
        app()
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]Download cancelled.[/yellow]")
        raise SystemExit(0)
    except YtMusicBatchError as e:
        _stop(console, e)
    except Exception as e:
        log.debug("Unhandled exception:", exc_info=True)
        _stop(console, e, unexpected=True)


if __name__ == "__main__":
    main()
