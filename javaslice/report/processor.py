"""Send method segments to the report service one at a time and aggregate."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from ..segmentation.models import ANONYMOUS, UNKNOWN_CLASS, Segment

logger = logging.getLogger(__name__)

ReportRequester = Callable[[dict], Any]


@dataclass
class ReportBlock:
    """Report produced for a single method segment."""
    class_name: str
    signature: str
    block: str
    report: str
    raw: Any = None


@dataclass
class ReportBatch:
    """All per-method reports of one file plus their concatenation."""
    blocks: list[ReportBlock] = field(default_factory=list)
    combined_report: str = ""


def extract_report_text(result: Any) -> str:
    """Pull the report body out of a report-service result."""
    if not result:
        return ""
    if isinstance(result, dict):
        if isinstance(result.get("report"), str):
            return result["report"]
        if isinstance(result.get("rawReport"), str):
            return result["rawReport"]
        analysis = result.get("analysis")
        if isinstance(analysis, dict) and isinstance(analysis.get("result"), str):
            return analysis["result"]
    if isinstance(result, str):
        return result
    return ""


def build_block_heading(class_name: str, signature: str) -> str:
    return f"【{class_name or UNKNOWN_CLASS}::{signature or ANONYMOUS}】"


def process_segments(
    segments: list[Segment],
    request_report: ReportRequester,
    project_id: str = "",
    project_name: str = "",
    path: str = "",
    use_raw: bool = False,
) -> ReportBatch:
    """Request one report per segment, sequentially, and join the results.

    A failing request does not stop the batch; its block carries
    ``"Error: <message>"`` in place of a report.
    """
    batch = ReportBatch()

    for segment in segments:
        content = segment.raw_text if use_raw else segment.text
        if not content:
            continue

        entry = {
            "class_name": segment.class_name or UNKNOWN_CLASS,
            "signature": segment.method_signature or ANONYMOUS,
            "block": content,
        }
        payload = {
            "projectId": project_id,
            "projectName": project_name,
            "path": path,
            "content": content,
        }

        try:
            result = request_report(payload)
            batch.blocks.append(ReportBlock(
                **entry,
                report=extract_report_text(result),
                raw=result,
            ))
        except Exception as e:
            logger.warning("Report request failed for %s: %s", segment.label, e)
            batch.blocks.append(ReportBlock(**entry, report=f"Error: {e}"))

    batch.combined_report = "\n\n".join(
        f"{build_block_heading(b.class_name, b.signature)}\n{b.report or ''}"
        for b in batch.blocks
    ).strip()

    if batch.combined_report:
        logger.info("Aggregated %d report blocks for %s", len(batch.blocks), path or "Java file")
    else:
        logger.info("No Java report blocks generated for %s", path or "Java file")

    return batch
