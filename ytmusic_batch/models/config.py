"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Formats accepted by yt-dlp's --audio-format
AUDIO_FORMATS = ("best", "aac", "alac", "flac", "m4a", "mp3", "opus", "vorbis", "wav")

DEFAULT_OUTPUT_TEMPLATE = "%(title)s.%(ext)s"

_BITRATE_REGEX = re.compile(r"^\d{2,4}[kK]$")


class BatchConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Conversion settings passed through to yt-dlp
    audio_format: str = "mp3"
    audio_quality: str = "0"
    output_template: str = DEFAULT_OUTPUT_TEMPLATE

    # Pause between links, to avoid hammering the video host
    request_delay: float = 1.0

    # Overrides the default tools folder under the local app-data directory
    tools_dir: str = ""

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        v = v.lower()
        if v not in AUDIO_FORMATS:
            raise ValueError(f"Audio format must be one of: {', '.join(AUDIO_FORMATS)}.")
        return v

    @field_validator("audio_quality", mode="before")
    @classmethod
    def validate_audio_quality(cls, v) -> str:
        """
        Accepts yt-dlp's VBR scale (0 best - 10 worst) or an explicit bitrate
        such as '320K'.
        """
        v = str(v).strip()
        if v.isdigit() and 0 <= int(v) <= 10:
            return str(int(v))
        if _BITRATE_REGEX.match(v):
            return v.upper()
        raise ValueError(
            "Audio quality must be 0 (best) to 10 (worst) or a bitrate like '320K'."
        )

    @field_validator("output_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Validates the yt-dlp output filename template."""
        if not v:
            raise ValueError("Output template cannot be empty.")
        if ".." in v or v.startswith(("/", "\\")) or re.match(r"^[A-Za-z]:", v):
            raise ValueError(
                "Output template cannot contain relative '..' or absolute paths."
            )
        if not re.search(r"%\(\w+\)s", v):
            raise ValueError(
                "Output template must contain at least one field such as %(title)s."
            )
        return v

    @field_validator("request_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0 or v > 60:
            raise ValueError("Request delay must be between 0 and 60 seconds.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
