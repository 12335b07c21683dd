"""
The main orchestrator: walks the link list and downloads each entry in turn.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from ytmusic_batch.cli.reporter import StatusReporter
from ytmusic_batch.media.extractor import AudioExtractor
from ytmusic_batch.models.config import BatchConfig
from ytmusic_batch.models.links import LinkEntry
from ytmusic_batch.models.stats import RunSummary
from ytmusic_batch.utils.path import create_dir

log = logging.getLogger(__name__)


class BatchRunner:
    """
    Processes links strictly one after another. A failed link is recorded
    and the loop moves on; nothing here aborts the batch.
    """

    def __init__(
        self,
        config: BatchConfig,
        extractor: AudioExtractor,
        reporter: StatusReporter,
    ):
        self.config = config
        self.extractor = extractor
        self.reporter = reporter

    async def run(self, lines: Iterable[str], output_dir: Path) -> RunSummary:
        """
        Downloads every valid link in `lines` into `output_dir`.

        Blank lines and lines without a recognized video host are skipped
        without being counted as failures.
        """
        if create_dir(output_dir):
            self.reporter.info(f"Created folder: {output_dir}")

        entries = LinkEntry.parse_lines(lines)
        summary = RunSummary(output_dir=output_dir, lines_read=len(entries))

        valid_entries = []
        for entry in entries:
            if entry.is_valid:
                valid_entries.append(entry)
            else:
                summary.record_skip()
                if entry.text:
                    log.debug(
                        f"Skipping line {entry.line_number}, not a video link: "
                        f"{entry.text}"
                    )

        total = len(valid_entries)
        if not total:
            self.reporter.warning(
                f"No YouTube links found in {len(entries)} line(s)."
            )
            return summary

        self.reporter.info(
            f"Found {total} link(s) to download in {len(entries)} line(s)."
        )

        for position, entry in enumerate(valid_entries, start=1):
            prefix = f"[{position}/{total}]"
            self.reporter.info(f"{prefix} Downloading: {entry.text}")

            result = await self.extractor.extract(entry.text, output_dir)
            summary.record(result)

            if result.ok:
                self.reporter.success(f"{prefix} Downloaded successfully!")
            else:
                self.reporter.error(f"{prefix} Download failed: {result.message}")

            if self.config.request_delay > 0:
                await asyncio.sleep(self.config.request_delay)

        return summary
