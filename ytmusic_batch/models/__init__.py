"""
Data Models Layer.

This package contains the Pydantic configuration model and the plain data
structures passed between the provisioner, the batch runner and the CLI.
"""

from .config import BatchConfig
from .links import LinkEntry
from .results import ResultStatus, RunResult
from .stats import RunSummary
from .tools import ToolSet

__all__ = [
    "BatchConfig",
    "LinkEntry",
    "ResultStatus",
    "RunResult",
    "RunSummary",
    "ToolSet",
]
