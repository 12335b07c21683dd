"""
Dataclass for tracking the outcome of a batch run.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .results import RunResult


@dataclass
class RunSummary:
    """Counts of processed, failed and skipped links for one run."""

    output_dir: Path
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    lines_read: int = 0
    results: list[RunResult] = field(default_factory=list, repr=False)

    @property
    def total(self) -> int:
        """Number of links that were actually attempted."""
        return self.succeeded + self.failed

    def record(self, result: RunResult) -> None:
        self.results.append(result)
        if result.ok:
            self.succeeded += 1
        else:
            self.failed += 1

    def record_skip(self) -> None:
        self.skipped += 1

    @property
    def failures(self) -> list[RunResult]:
        return [r for r in self.results if not r.ok]
