"""Tests for the yt-dlp invocation step."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from ytmusic_batch.media.extractor import (
    AudioExtractor,
    build_ytdlp_args,
    classify_outcome,
    is_informational_only,
)
from ytmusic_batch.models.config import BatchConfig
from ytmusic_batch.models.tools import ToolSet

LINK = "https://youtu.be/abc"


class FakeStream:
    """Stand-in for a subprocess pipe."""

    def __init__(self, data: bytes, error: Exception | None = None) -> None:
        self._data = data
        self._error = error

    async def read(self) -> bytes:
        if self._error:
            raise self._error
        return self._data


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process."""

    def __init__(self, returncode: int, stdout: bytes = b"", stderr: bytes = b"") -> None:
        self.stdout = FakeStream(stdout)
        self.stderr = FakeStream(stderr)
        self._returncode = returncode
        self.returncode: int | None = None
        self.killed = False

    def kill(self) -> None:
        self.killed = True
        self._returncode = -9

    async def wait(self) -> int:
        self.returncode = self._returncode
        return self._returncode


class TestBuildArgs:
    """Tests for the yt-dlp command line."""

    def test_default_arguments(
        self, tmp_path: Path, toolset: ToolSet, config: BatchConfig
    ) -> None:
        args = build_ytdlp_args(LINK, tmp_path, toolset, config)
        assert args == [
            "-x",
            "--audio-format",
            "mp3",
            "--audio-quality",
            "0",
            "--ffmpeg-location",
            str(toolset.tools_dir / "ffmpeg" / "bin"),
            "-o",
            str(tmp_path / "%(title)s.%(ext)s"),
            LINK,
        ]

    def test_configured_format_and_quality(
        self, tmp_path: Path, toolset: ToolSet
    ) -> None:
        config = BatchConfig(audio_format="flac", audio_quality="320K")
        args = build_ytdlp_args(LINK, tmp_path, toolset, config)
        assert args[args.index("--audio-format") + 1] == "flac"
        assert args[args.index("--audio-quality") + 1] == "320K"
        assert args[-1] == LINK


class TestClassifyOutcome:
    """Tests for success/failure classification."""

    def test_clean_exit(self) -> None:
        assert classify_outcome(LINK, 0, "").ok is True

    def test_whitespace_stderr_is_ignored(self) -> None:
        assert classify_outcome(LINK, 0, "\n  \n").ok is True

    @pytest.mark.parametrize("exit_code", [1, 2, 101, -9])
    def test_non_zero_exit_is_failure(self, exit_code: int) -> None:
        result = classify_outcome(LINK, exit_code, "")
        assert result.ok is False
        assert result.exit_code == exit_code
        assert str(exit_code) in result.message

    def test_info_only_stderr_is_success(self) -> None:
        stderr = "INFO: Downloading webpage\nINFO: Extracting audio\n"
        assert classify_outcome(LINK, 0, stderr).ok is True

    def test_info_only_stderr_with_non_zero_exit_is_failure(self) -> None:
        assert classify_outcome(LINK, 1, "INFO: something\n").ok is False

    def test_error_stderr_with_zero_exit_is_failure(self) -> None:
        stderr = "ERROR: [youtube] abc: Video unavailable\n"
        result = classify_outcome(LINK, 0, stderr)
        assert result.ok is False
        assert result.message == stderr.strip()
        assert result.exit_code == 0

    def test_warning_stderr_is_failure(self) -> None:
        assert classify_outcome(LINK, 0, "WARNING: nsig extraction failed").ok is False

    def test_mixed_stderr_is_failure(self) -> None:
        stderr = "INFO: Downloading\nERROR: unable to download\n"
        assert classify_outcome(LINK, 0, stderr).ok is False

    def test_is_informational_only(self) -> None:
        assert is_informational_only("INFO: a\n\n  INFO: b") is True
        assert is_informational_only("INFO: a\nERROR: b") is False


class TestAudioExtractor:
    """Tests for AudioExtractor.extract with a faked subprocess."""

    @pytest.fixture
    def extractor(self, toolset: ToolSet, config: BatchConfig) -> AudioExtractor:
        return AudioExtractor(toolset, config)

    @pytest.mark.asyncio
    async def test_successful_download(
        self, extractor: AudioExtractor, toolset: ToolSet, tmp_path: Path
    ) -> None:
        process = FakeProcess(0, stdout=b"[download] 100%\n")
        with patch(
            "asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)
        ) as spawn:
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is True
        call = spawn.await_args
        assert call.args[0] == str(toolset.downloader)
        assert list(call.args[1:]) == build_ytdlp_args(
            LINK, tmp_path, toolset, extractor.config
        )
        assert call.kwargs["stdout"] == asyncio.subprocess.PIPE
        assert call.kwargs["stderr"] == asyncio.subprocess.PIPE

    @pytest.mark.asyncio
    async def test_stderr_error_with_zero_exit(
        self, extractor: AudioExtractor, tmp_path: Path
    ) -> None:
        process = FakeProcess(0, stderr=b"ERROR: Private video\n")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is False
        assert result.message == "ERROR: Private video"

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, extractor: AudioExtractor, tmp_path: Path) -> None:
        with patch(
            "asyncio.create_subprocess_exec", new=AsyncMock(return_value=FakeProcess(1))
        ):
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is False
        assert result.exit_code == 1

    @pytest.mark.asyncio
    async def test_undecodable_output_is_tolerated(
        self, extractor: AudioExtractor, tmp_path: Path
    ) -> None:
        process = FakeProcess(0, stdout=b"\xff\xfe title", stderr=b"INFO: \xff\n")
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is True

    @pytest.mark.asyncio
    async def test_launch_error_becomes_failure(
        self, extractor: AudioExtractor, tmp_path: Path
    ) -> None:
        spawn = AsyncMock(side_effect=FileNotFoundError("yt-dlp.exe not found"))
        with patch("asyncio.create_subprocess_exec", new=spawn):
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is False
        assert result.exit_code is None
        assert "yt-dlp.exe not found" in result.message

    @pytest.mark.asyncio
    async def test_child_is_killed_when_reading_fails(
        self, extractor: AudioExtractor, tmp_path: Path
    ) -> None:
        process = FakeProcess(0)
        process.stderr = FakeStream(b"", error=ConnectionResetError("pipe closed"))
        with patch("asyncio.create_subprocess_exec", new=AsyncMock(return_value=process)):
            result = await extractor.extract(LINK, tmp_path)

        assert result.ok is False
        assert "pipe closed" in result.message
        assert process.killed is True
        assert process.returncode == -9


class TestRealSubprocess:
    """Runs a real child process in place of yt-dlp."""

    # Writes well past the OS pipe buffer on both streams, interleaved, so
    # the child blocks unless both pipes are read at the same time
    CHATTY_CHILD = (
        "import sys\n"
        "for i in range(20000):\n"
        "    sys.stdout.write('x' * 200 + '\\n')\n"
        "    sys.stderr.write('INFO: line %d\\n' % i)\n"
        "sys.stdout.flush()\n"
        "sys.stderr.flush()\n"
    )

    @pytest.fixture
    def python_toolset(self, tmp_path: Path) -> ToolSet:
        return ToolSet(
            tools_dir=tmp_path,
            downloader=Path(sys.executable),
            transcoder=tmp_path / "ffmpeg" / "bin" / "ffmpeg",
        )

    @pytest.mark.asyncio
    async def test_large_output_on_both_pipes_is_drained(
        self, python_toolset: ToolSet, config: BatchConfig
    ) -> None:
        extractor = AudioExtractor(python_toolset, config)

        exit_code, stdout, stderr = await asyncio.wait_for(
            extractor._run(["-c", self.CHATTY_CHILD]), timeout=60
        )

        assert exit_code == 0
        assert len(stdout.splitlines()) == 20000
        assert len(stderr.splitlines()) == 20000
        assert classify_outcome(LINK, exit_code, stderr).ok is True

    @pytest.mark.asyncio
    async def test_real_child_failure_is_classified(
        self, python_toolset: ToolSet, config: BatchConfig
    ) -> None:
        extractor = AudioExtractor(python_toolset, config)
        script = "import sys; sys.stderr.write('ERROR: Video unavailable\\n'); sys.exit(1)"

        exit_code, _, stderr = await extractor._run(["-c", script])
        result = classify_outcome(LINK, exit_code, stderr)

        assert exit_code == 1
        assert result.ok is False
        assert result.message == "ERROR: Video unavailable"
