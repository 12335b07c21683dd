"""
ytmusic-batch: batch-download audio from video links with yt-dlp and FFmpeg.
"""

__version__ = "0.1.0"
