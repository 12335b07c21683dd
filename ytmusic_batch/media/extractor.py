"""
Runs yt-dlp for a single link and classifies the outcome.
"""

import asyncio
import logging
import os
import subprocess
from pathlib import Path

from ytmusic_batch.models.config import BatchConfig
from ytmusic_batch.models.results import RunResult
from ytmusic_batch.models.tools import ToolSet

log = logging.getLogger(__name__)

# yt-dlp lines on stderr that do not indicate a problem
INFO_PREFIX = "INFO:"


def build_ytdlp_args(
    link: str, output_dir: Path, toolset: ToolSet, config: BatchConfig
) -> list[str]:
    """
    Builds the yt-dlp argument list: audio only, converted to the configured
    format at the configured quality, using the private FFmpeg install and
    naming files after the video's title.
    """
    return [
        "-x",
        "--audio-format",
        config.audio_format,
        "--audio-quality",
        config.audio_quality,
        "--ffmpeg-location",
        str(toolset.ffmpeg_location),
        "-o",
        str(output_dir / config.output_template),
        link,
    ]


def is_informational_only(stderr: str) -> bool:
    """True if every non-blank stderr line is an INFO line."""
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    return all(line.startswith(INFO_PREFIX) for line in lines)


def classify_outcome(link: str, exit_code: int, stderr: str) -> RunResult:
    """
    Anything on stderr other than INFO lines is treated as a failure, even
    when yt-dlp exits with 0. Otherwise the exit code decides.
    """
    error_text = stderr.strip()
    if error_text and not is_informational_only(error_text):
        return RunResult.failure(link, error_text, exit_code=exit_code)
    if exit_code != 0:
        return RunResult.failure(
            link, f"yt-dlp exited with code {exit_code}", exit_code=exit_code
        )
    return RunResult.success(link, exit_code=exit_code)


class AudioExtractor:
    """Launches yt-dlp as a subprocess, one link at a time."""

    def __init__(self, toolset: ToolSet, config: BatchConfig):
        self.toolset = toolset
        self.config = config

    @staticmethod
    def _creation_flags() -> int:
        # Keep a console window from flashing up for every child on Windows
        if os.name == "nt":
            return subprocess.CREATE_NO_WINDOW
        return 0

    async def _run(self, args: list[str]) -> tuple[int, str, str]:
        process = await asyncio.create_subprocess_exec(
            str(self.toolset.downloader),
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            creationflags=self._creation_flags(),
        )
        try:
            # Both pipes are drained together so a full buffer on one side
            # cannot block the child
            stdout, stderr = await asyncio.gather(
                process.stdout.read(), process.stderr.read()
            )
            exit_code = await process.wait()
        except BaseException:
            if process.returncode is None:
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
                await process.wait()
            raise
        return (
            exit_code,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def extract(self, link: str, output_dir: Path) -> RunResult:
        """
        Downloads the audio of one link into `output_dir`.

        Never raises: launch or I/O problems are returned as a failed result.
        """
        args = build_ytdlp_args(link, output_dir, self.toolset, self.config)
        log.debug(f"Running: {self.toolset.downloader} {' '.join(args)}")
        try:
            exit_code, stdout, stderr = await self._run(args)
        except Exception as e:
            log.debug("yt-dlp invocation failed:", exc_info=True)
            return RunResult.failure(link, f"Could not run yt-dlp: {e}")

        log.debug(f"yt-dlp exited with code {exit_code} for {link}")
        if stdout:
            log.debug(stdout.rstrip())
        return classify_outcome(link, exit_code, stderr)
