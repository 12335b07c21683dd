"""
Tagged per-link outcome returned by the yt-dlp invocation step.
"""

from dataclasses import dataclass
from enum import Enum


class ResultStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RunResult:
    """
    The outcome of downloading a single link.

    Failures carry a human-readable reason in `message`. `exit_code` is None
    when the process could not be started or awaited at all.
    """

    status: ResultStatus
    link: str
    message: str = ""
    exit_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @classmethod
    def success(cls, link: str, exit_code: int | None = 0) -> "RunResult":
        return cls(ResultStatus.SUCCESS, link, exit_code=exit_code)

    @classmethod
    def failure(
        cls, link: str, message: str, exit_code: int | None = None
    ) -> "RunResult":
        return cls(ResultStatus.FAILED, link, message=message, exit_code=exit_code)
