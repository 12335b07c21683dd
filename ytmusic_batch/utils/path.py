"""
Utilities for resolving application folders and user-entered paths.
"""

import os
from pathlib import Path

APP_FOLDER_NAME = "ytmusic-batch"


def get_config_dir() -> Path:
    """Folder holding config.ini (roaming on Windows, XDG config elsewhere)."""
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / APP_FOLDER_NAME


def get_tools_dir(override: str = "") -> Path:
    """
    Folder holding the private yt-dlp and FFmpeg installs
    (local app-data on Windows, XDG data elsewhere).
    """
    if override:
        return Path(override).expanduser()
    if os.name == "nt":
        base_dir = Path(os.getenv("LOCALAPPDATA", "~\\AppData\\Local"))
    else:
        base_dir = Path(os.getenv("XDG_DATA_HOME", "~/.local/share"))
    return base_dir.expanduser() / APP_FOLDER_NAME


def get_default_output_dir() -> Path:
    """The 'Music' folder on the user's desktop."""
    return Path.home() / "Desktop" / "Music"


def clean_path_input(value: str | None) -> str:
    """
    Strips whitespace and the surrounding quotes that terminals add when a
    file is dragged onto the prompt.
    """
    if not value:
        return ""
    return value.strip().strip('"').strip("'").strip()


def resolve_output_dir(value: str | None) -> Path:
    """Turns the output-folder answer into a path, defaulting to Desktop/Music."""
    cleaned = clean_path_input(value)
    if not cleaned:
        return get_default_output_dir()
    return Path(cleaned).expanduser()


def create_dir(directory_path: Path) -> bool:
    """Creates a directory if it does not already exist. Returns True if created."""
    if directory_path.is_dir():
        return False
    directory_path.mkdir(parents=True, exist_ok=True)
    return True
