"""
External Tools Layer.

This package installs and locates the yt-dlp and FFmpeg executables.
"""

from .provisioner import ToolProvisioner

__all__ = ["ToolProvisioner"]
