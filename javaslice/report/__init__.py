"""Report-service collaborator."""

from .client import ReportClient, ReportServiceError
from .processor import (
    ReportBatch,
    ReportBlock,
    build_block_heading,
    extract_report_text,
    process_segments,
)

__all__ = [
    "ReportClient",
    "ReportServiceError",
    "ReportBatch",
    "ReportBlock",
    "build_block_heading",
    "extract_report_text",
    "process_segments",
]
