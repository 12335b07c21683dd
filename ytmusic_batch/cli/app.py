"""
Defines the command-line interface for the application using Typer.

Running the program without a sub-command starts the interactive flow: the
tools are checked, then the user is asked for the link file and the output
folder.
"""

import asyncio
import logging
import time
from pathlib import Path

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ytmusic_batch import __version__
from ytmusic_batch.core.batch_runner import BatchRunner
from ytmusic_batch.exceptions import InputFileError
from ytmusic_batch.media.extractor import AudioExtractor
from ytmusic_batch.storage.config_manager import ConfigManager
from ytmusic_batch.storage.link_list import read_link_file
from ytmusic_batch.tools.provisioner import ToolProvisioner
from ytmusic_batch.utils.path import (
    clean_path_input,
    get_config_dir,
    get_tools_dir,
    resolve_output_dir,
)

from .formatters import (
    print_banner,
    print_config,
    print_summary_panel,
    print_toolset_table,
)
from .reporter import PlainStatusReporter, RichStatusReporter

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=False,
        )
    ],
)
log = logging.getLogger("ytmusic_batch")

app = typer.Typer(
    name="ytmusic-batch",
    help=(
        "Download the audio of every YouTube link in a text file as mp3 (or another"
        " format), using yt-dlp and FFmpeg."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"

INPUT_PROMPT = "Enter the path to the text file with YouTube links (e.g. D:\\songs.txt)"
OUTPUT_PROMPT = (
    "Enter the folder to save the music in (or press Enter for 'Music' on the desktop)"
)


def _pause(enabled: bool) -> None:
    if enabled:
        click.pause("Press any key to exit...")


def _run_session(
    input_file: str | None,
    output_folder: str | None,
    cli_options: dict,
    pause: bool,
    plain: bool = False,
) -> None:
    """Provisions the tools, collects the paths and runs the batch."""
    config = ConfigManager(CONFIG_FILE).load_config(cli_options)
    reporter = PlainStatusReporter() if plain else RichStatusReporter(console)

    async def _session_async():
        print_banner(console)

        provisioner = ToolProvisioner(get_tools_dir(config.tools_dir), reporter)
        toolset = await provisioner.ensure_tools()

        raw_input_path = input_file
        if raw_input_path is None:
            raw_input_path = typer.prompt(INPUT_PROMPT)
        input_path = Path(clean_path_input(raw_input_path)).expanduser()

        try:
            lines = await read_link_file(input_path)
        except InputFileError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            return None

        raw_output = output_folder
        if raw_output is None:
            raw_output = typer.prompt(OUTPUT_PROMPT, default="", show_default=False)
        output_dir = resolve_output_dir(raw_output)

        runner = BatchRunner(config, AudioExtractor(toolset, config), reporter)
        start_time = time.monotonic()
        summary = await runner.run(lines, output_dir)
        return summary, time.monotonic() - start_time

    outcome = asyncio.run(_session_async())
    if outcome is None:
        _pause(pause)
        raise typer.Exit(code=1)

    summary, duration = outcome
    print_summary_panel(summary, duration)
    _pause(pause)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """YouTube Music Downloader"""
    if version:
        console.print(f"[bold]ytmusic-batch[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("ytmusic_batch").setLevel(log_level)

    if show_config:
        config = ConfigManager(CONFIG_FILE).load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        _run_session(None, None, {}, pause=True)


@app.command(name="download")
def download_command(
    input_file: str | None = typer.Option(
        None,
        "-i",
        "--input",
        help="Text file with one YouTube link per line. Prompted for if omitted.",
    ),
    output_folder: str | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Folder to save the audio files in. Prompted for if omitted.",
    ),
    audio_format: str | None = typer.Option(
        None,
        "-f",
        "--format",
        help="Audio format: best, aac, alac, flac, m4a, mp3, opus, vorbis, wav.",
    ),
    audio_quality: str | None = typer.Option(
        None,
        "-q",
        "--quality",
        help="0 (best) to 10 (worst), or a bitrate such as 320K.",
    ),
    delay: float | None = typer.Option(
        None, "--delay", help="Seconds to wait between links (default 1)."
    ),
    no_pause: bool = typer.Option(
        False, "--no-pause", help="Do not wait for a keypress before exiting."
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Print status lines without colors."
    ),
):
    """Download the audio of every link in a text file."""
    cli_options = {
        key: value
        for key, value in {
            "audio_format": audio_format,
            "audio_quality": audio_quality,
            "request_delay": delay,
        }.items()
        if value is not None
    }
    _run_session(
        input_file, output_folder, cli_options, pause=not no_pause, plain=plain
    )


@app.command()
def tools():
    """Install yt-dlp and FFmpeg if needed and show where they live."""
    config = ConfigManager(CONFIG_FILE).load_config()
    provisioner = ToolProvisioner(
        get_tools_dir(config.tools_dir), RichStatusReporter(console)
    )
    toolset = asyncio.run(provisioner.ensure_tools())
    print_toolset_table(toolset)


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with the default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    ConfigManager(CONFIG_FILE).save_new_config()
    console.print(
        f"[bold green]✓ Configuration saved to '{escape(str(CONFIG_FILE))}'[/bold green]"
    )
