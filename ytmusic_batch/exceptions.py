"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class YtMusicBatchError(Exception):
    """Base exception for all application-specific errors."""


class ProvisioningError(YtMusicBatchError):
    """
    Raised when yt-dlp or FFmpeg cannot be downloaded or installed.
    The run cannot continue without both tools.
    """


class InputFileError(YtMusicBatchError):
    """Raised when the link list file is missing or cannot be read."""


class ConfigurationError(YtMusicBatchError):
    """Raised for issues related to configuration loading or validation."""
