"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ytmusic_batch.exceptions import (
    ConfigurationError,
    InputFileError,
    ProvisioningError,
)
from ytmusic_batch.models.stats import RunSummary
from ytmusic_batch.models.tools import ToolSet
from ytmusic_batch.utils.formatting import format_duration, last_lines

ERROR_HINTS: dict[type[BaseException], tuple[str, ...]] = {
    ProvisioningError: (
        "Check your internet connection and try again.",
        "GitHub may be rate-limiting downloads; wait a few minutes.",
        "Or put yt-dlp and FFmpeg into the tools folder yourself"
        " (`ytmusic-batch tools` shows where).",
    ),
    InputFileError: (
        "Check that the path to the link file is correct.",
        "The file should be plain text with one link per line.",
    ),
    ConfigurationError: (
        "Run `ytmusic-batch --show-config` to review your settings.",
        "Run `ytmusic-batch init --force` to restore the defaults.",
    ),
    PermissionError: (
        "The output or tools folder is not writable.",
        "Pick a different output folder.",
    ),
}
FALLBACK_HINTS = ("Run the command again with -vv to see debug logs.",)


def hints_for(error: BaseException) -> tuple[str, ...]:
    """Hints for the closest known class in the error's hierarchy."""
    for cls in type(error).__mro__:
        if cls in ERROR_HINTS:
            return ERROR_HINTS[cls]
    return FALLBACK_HINTS


def render_error_panel(error: BaseException, unexpected: bool = False) -> Panel:
    """Builds the red panel shown when a run stops on an error."""
    headline = Text.assemble((f"{type(error).__name__}: ", "bold red"), str(error))
    hints = Text("\n".join(f"• {hint}" for hint in hints_for(error)))
    title = "Unexpected Error" if unexpected else "Run Stopped"
    return Panel(
        Group(headline, Text(), Text("What you can try", style="bold yellow"), hints),
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
        expand=False,
    )


def print_banner(console: Console | None = None):
    console = console or Console()
    console.rule("[bold cyan]YouTube Music Downloader[/bold cyan]", style="cyan")


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        content += f"{key} = {escape(str(value))}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def print_toolset_table(toolset: ToolSet):
    """Displays where the external tools are installed."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Tools Folder:", f"[dim]{escape(str(toolset.tools_dir))}[/dim]")
    table.add_row("yt-dlp:", escape(str(toolset.downloader)))
    table.add_row("FFmpeg:", escape(str(toolset.transcoder)))

    console.print(
        Panel(
            table,
            title="[bold green]✓ Tools Ready[/bold green]",
            border_style="green",
        )
    )


def print_summary_panel(summary: RunSummary, duration_s: float):
    """Displays the final summary of the batch run."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Lines Read:", str(summary.lines_read))
    stats_table.add_row("Total Links:", f"[bold]{summary.total}[/bold]")
    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{summary.succeeded}[/bold green]"
    )

    # Failure and skip metrics (only show if non-zero)
    if summary.failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{summary.failed}[/bold red]")
    if summary.skipped > 0:
        stats_table.add_row(
            "○ Skipped Lines:", f"[yellow]{summary.skipped}[/yellow]"
        )

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")
    stats_table.add_row(
        "Saved To:", f"[cyan]{escape(str(summary.output_dir))}[/cyan]"
    )

    if summary.failed == 0 and summary.total > 0:
        title = "✓ [bold]Download Complete[/bold]"
        border_color = "green"
    elif summary.succeeded > 0:
        title = "⚠ [bold]Completed With Errors[/bold]"
        border_color = "yellow"
    else:
        title = "[bold]Summary[/bold]"
        border_color = "red" if summary.failed else "cyan"

    console.print()
    console.print(
        Panel(stats_table, title=title, border_style=border_color, expand=False)
    )

    if summary.failures:
        failures = Table(title="Failed Links", show_lines=True)
        failures.add_column("Link", style="cyan", overflow="fold")
        failures.add_column("Reason", style="red", overflow="fold")
        for result in summary.failures:
            failures.add_row(escape(result.link), escape(last_lines(result.message)))
        console.print(failures)
