"""
Model for a single line of the input link list.
"""

from dataclasses import dataclass

# A line is only processed if it contains one of these substrings
VIDEO_HOST_MARKERS = ("youtube.com/", "youtu.be/")


def is_video_link(text: str) -> bool:
    """Checks whether a trimmed line points at a supported video host."""
    return bool(text) and any(marker in text for marker in VIDEO_HOST_MARKERS)


@dataclass(frozen=True)
class LinkEntry:
    """One line read from the link file, in raw and trimmed form."""

    raw: str
    line_number: int = 0

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def is_valid(self) -> bool:
        return is_video_link(self.text)

    @classmethod
    def parse_lines(cls, lines) -> list["LinkEntry"]:
        """Wraps every input line, keeping its 1-based position."""
        return [cls(raw=line, line_number=i) for i, line in enumerate(lines, start=1)]
