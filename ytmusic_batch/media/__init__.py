"""
Media Processing Layer.

This package drives yt-dlp to download and convert the audio of each link.
"""

from .extractor import AudioExtractor

__all__ = ["AudioExtractor"]
