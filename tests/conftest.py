"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from ytmusic_batch.models.config import BatchConfig
from ytmusic_batch.models.tools import ToolSet


class RecordingReporter:
    """StatusReporter that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_kind(self, kind: str) -> list[str]:
        return [text for k, text in self.messages if k == kind]


@pytest.fixture
def reporter() -> RecordingReporter:
    """A reporter that records messages instead of printing them."""
    return RecordingReporter()


@pytest.fixture
def config() -> BatchConfig:
    """Default configuration without the pause between links."""
    return BatchConfig(request_delay=0)


@pytest.fixture
def toolset(tmp_path: Path) -> ToolSet:
    """Tool paths inside a temporary tools folder (Windows layout)."""
    return ToolSet.for_directory(tmp_path / "tools", platform="windows")


@pytest.fixture
def sample_lines() -> list[str]:
    """A link list with two valid entries and two lines to skip."""
    return [
        "https://youtu.be/abc",
        "",
        "not a link",
        "https://www.youtube.com/watch?v=xyz",
    ]
