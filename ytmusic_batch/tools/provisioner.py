"""
Installs yt-dlp and FFmpeg into the private tools folder when they are missing.

Each tool is fetched at most once per run with a single HTTPS request. There
is no retry: any failure raises ProvisioningError and the run stops.
"""

import asyncio
import logging
import os
import shutil
import stat
import sys
import tarfile
import zipfile
from pathlib import Path

import aiofiles
import aiohttp

from ytmusic_batch.cli.reporter import StatusReporter
from ytmusic_batch.exceptions import ProvisioningError
from ytmusic_batch.models.tools import ToolSet

log = logging.getLogger(__name__)

_FFMPEG_BASE_URL = "https://github.com/BtbN/FFmpeg-Builds/releases/download/latest"
_YTDLP_BASE_URL = "https://github.com/yt-dlp/yt-dlp/releases/latest/download"

FFMPEG_RELEASES = {
    "windows": f"{_FFMPEG_BASE_URL}/ffmpeg-master-latest-win64-gpl.zip",
    "linux": f"{_FFMPEG_BASE_URL}/ffmpeg-master-latest-linux64-gpl.tar.xz",
}
YTDLP_RELEASES = {
    "windows": f"{_YTDLP_BASE_URL}/yt-dlp.exe",
    "linux": f"{_YTDLP_BASE_URL}/yt-dlp_linux",
    "darwin": f"{_YTDLP_BASE_URL}/yt-dlp_macos",
}

CHUNK_SIZE = 262144  # 256 KB


def current_platform() -> str:
    """Maps the running OS onto the keys of the release tables."""
    if os.name == "nt":
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def extract_archive(archive_path: Path, target_dir: Path) -> None:
    """Unpacks a .zip or .tar.* archive into target_dir."""
    name = archive_path.name.lower()
    if name.endswith(".zip"):
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(target_dir)
    elif ".tar" in name:
        with tarfile.open(archive_path) as archive:
            archive.extractall(target_dir, filter="data")
    else:
        raise ProvisioningError(f"Unsupported archive format: {archive_path.name}")


def flatten_single_folder(target_dir: Path) -> None:
    """
    Release archives wrap everything in one versioned folder
    (e.g. 'ffmpeg-master-latest-win64-gpl/bin/...'). Moves that folder's
    contents up into target_dir so the binary path does not depend on the
    release name.
    """
    subdirs = [p for p in target_dir.iterdir() if p.is_dir()]
    if not subdirs:
        raise ProvisioningError(f"Archive extracted into '{target_dir}' is empty.")
    if (target_dir / "bin").is_dir():
        return

    extracted = subdirs[0]
    for child in list(extracted.iterdir()):
        destination = target_dir / child.name
        if destination.is_dir():
            shutil.rmtree(destination)
        elif destination.exists():
            destination.unlink()
        shutil.move(str(child), str(destination))
    shutil.rmtree(extracted)


class ToolProvisioner:
    """Makes sure both executables exist before the batch starts."""

    def __init__(
        self,
        tools_dir: Path,
        reporter: StatusReporter,
        platform: str | None = None,
    ):
        self.platform = platform or current_platform()
        self.toolset = ToolSet.for_directory(tools_dir, self.platform)
        self.reporter = reporter

    async def ensure_tools(self) -> ToolSet:
        """
        Installs whichever of FFmpeg and yt-dlp is missing and returns the
        resolved tool paths.

        Raises:
            ProvisioningError: If a tool cannot be downloaded or installed.
        """
        try:
            self.toolset.tools_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProvisioningError(
                f"Cannot create tools folder '{self.toolset.tools_dir}': {e}"
            ) from e

        if self.toolset.transcoder.is_file():
            self.reporter.success("FFmpeg found and ready to use.")
        else:
            self.reporter.info("FFmpeg not found. Installing FFmpeg...")
            await self.install_ffmpeg()

        if self.toolset.downloader.is_file():
            self.reporter.success("yt-dlp found and ready to use.")
        else:
            self.reporter.info("yt-dlp not found. Downloading yt-dlp...")
            await self.install_ytdlp()

        return self.toolset

    def _release_url(self, releases: dict[str, str], tool: str) -> str:
        url = releases.get(self.platform)
        if not url:
            raise ProvisioningError(
                f"No {tool} release is available for platform '{self.platform}'. "
                f"Install {tool} manually into '{self.toolset.tools_dir}'."
            )
        return url

    async def _fetch(self, url: str, destination: Path) -> int:
        """Streams one URL to disk. Returns the number of bytes written."""
        log.debug(f"GET {url} -> {destination}")
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=30, sock_read=120)
        async with (
            aiohttp.ClientSession(timeout=timeout) as session,
            session.get(url, allow_redirects=True) as response,
        ):
            response.raise_for_status()
            written = 0
            async with aiofiles.open(destination, "wb") as f:
                async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                    await f.write(chunk)
                    written += len(chunk)
        return written

    async def _download(self, url: str, destination: Path, tool: str) -> None:
        try:
            size = await self._fetch(url, destination)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self.reporter.error(f"Error downloading {tool}: {e}")
            raise ProvisioningError(f"Failed to download {tool} from {url}: {e}") from e
        log.debug(f"Downloaded {size} bytes for {tool}")

    async def install_ffmpeg(self) -> None:
        """Downloads the FFmpeg build archive and unpacks it into tools/ffmpeg."""
        url = self._release_url(FFMPEG_RELEASES, "FFmpeg")
        ffmpeg_dir = self.toolset.ffmpeg_dir
        archive_path = self.toolset.tools_dir / url.rsplit("/", 1)[-1]

        try:
            self.reporter.info("Downloading FFmpeg...")
            await self._download(url, archive_path, "FFmpeg")

            self.reporter.info("Extracting FFmpeg...")
            try:
                if ffmpeg_dir.exists():
                    await asyncio.to_thread(shutil.rmtree, ffmpeg_dir)
                ffmpeg_dir.mkdir(parents=True)
                await asyncio.to_thread(extract_archive, archive_path, ffmpeg_dir)
                await asyncio.to_thread(flatten_single_folder, ffmpeg_dir)
            except (OSError, zipfile.BadZipFile, tarfile.TarError) as e:
                self.reporter.error(f"Error installing FFmpeg: {e}")
                raise ProvisioningError(f"Failed to extract FFmpeg: {e}") from e
        finally:
            archive_path.unlink(missing_ok=True)

        if not self.toolset.transcoder.is_file():
            raise ProvisioningError(
                f"FFmpeg archive did not contain '{self.toolset.transcoder.name}' "
                "in its bin folder."
            )
        if self.platform != "windows":
            _make_executable(self.toolset.transcoder)
        self.reporter.success("FFmpeg installed successfully!")

    async def install_ytdlp(self) -> None:
        """Downloads the standalone yt-dlp executable."""
        url = self._release_url(YTDLP_RELEASES, "yt-dlp")
        destination = self.toolset.downloader
        partial = destination.with_name(destination.name + ".part")

        try:
            self.reporter.info("Downloading yt-dlp...")
            await self._download(url, partial, "yt-dlp")
            try:
                partial.replace(destination)
                if self.platform != "windows":
                    _make_executable(destination)
            except OSError as e:
                self.reporter.error(f"Error installing yt-dlp: {e}")
                raise ProvisioningError(f"Failed to install yt-dlp: {e}") from e
        finally:
            partial.unlink(missing_ok=True)

        self.reporter.success("yt-dlp downloaded successfully!")
