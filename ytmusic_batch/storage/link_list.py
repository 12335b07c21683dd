"""
Reads the user's link list from disk.
"""

import logging
from pathlib import Path

import aiofiles

from ytmusic_batch.exceptions import InputFileError

log = logging.getLogger(__name__)


async def read_link_file(path: Path) -> list[str]:
    """
    Returns every line of the link file, unfiltered. Filtering of blank and
    unsupported lines is left to the batch runner so it can count them.

    Raises:
        InputFileError: If the file does not exist or cannot be decoded.
    """
    if not path.is_file():
        raise InputFileError(f"The file '{path}' does not exist!")

    try:
        # utf-8-sig drops the BOM that Notepad adds
        async with aiofiles.open(path, "r", encoding="utf-8-sig") as f:
            content = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Could not read file '{path}': {e}") from e

    lines = content.splitlines()
    log.debug(f"Read {len(lines)} lines from '{path}'")
    return lines
