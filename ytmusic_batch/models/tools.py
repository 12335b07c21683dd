"""
Locations of the external executables used for a run.
"""

import os
from dataclasses import dataclass
from pathlib import Path


def executable_name(name: str, platform: str | None = None) -> str:
    """Appends '.exe' on Windows."""
    platform = platform or ("windows" if os.name == "nt" else "posix")
    return f"{name}.exe" if platform == "windows" else name


@dataclass(frozen=True)
class ToolSet:
    """Paths to yt-dlp and FFmpeg inside the private tools folder."""

    tools_dir: Path
    downloader: Path
    transcoder: Path

    @classmethod
    def for_directory(cls, tools_dir: Path, platform: str | None = None) -> "ToolSet":
        """
        Resolves the well-known layout:
        `<tools_dir>/yt-dlp[.exe]` and `<tools_dir>/ffmpeg/bin/ffmpeg[.exe]`.
        """
        return cls(
            tools_dir=tools_dir,
            downloader=tools_dir / executable_name("yt-dlp", platform),
            transcoder=tools_dir / "ffmpeg" / "bin" / executable_name("ffmpeg", platform),
        )

    @property
    def ffmpeg_dir(self) -> Path:
        """The folder the FFmpeg archive is unpacked into."""
        return self.tools_dir / "ffmpeg"

    @property
    def ffmpeg_location(self) -> Path:
        """The directory handed to yt-dlp's --ffmpeg-location."""
        return self.transcoder.parent
