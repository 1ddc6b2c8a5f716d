"""FastAPI REST API server for JavaSlice."""

import argparse
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..audit import AuditLogger
from ..config import load_config
from ..report import ReportClient, process_segments
from ..report.processor import ReportRequester
from ..segmentation import build_segments, is_java_path, process_java_file

logger = logging.getLogger(__name__)


# Request/Response Models
class SourceRequest(BaseModel):
    """Java source submitted for segmentation."""
    source: str = Field(..., description="Raw Java source")
    path: str | None = Field(None, description="File path, used only for logging")


class SegmentsResponse(BaseModel):
    """Ordered method segments of one file."""
    path: str | None = None
    count: int
    segments: list[dict]


class CleanResponse(BaseModel):
    """Cleaned source with its class/method blocks."""
    cleanedSource: str
    classMethods: list[dict]


class ReportRequest(BaseModel):
    """Java source to analyze method by method."""
    source: str
    path: str
    projectId: str | None = None
    projectName: str | None = None
    useRaw: bool | None = None


class ReportBlockResponse(BaseModel):
    className: str
    signature: str
    block: str
    report: str


class ReportResponse(BaseModel):
    """Per-method reports and their concatenation."""
    path: str
    blocks: list[ReportBlockResponse]
    combinedReport: str


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    return request.client.host if request.client else None


def create_app(
    config: dict | None = None,
    request_report: ReportRequester | None = None,
    audit: AuditLogger | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``request_report`` and ``audit`` default to the HTTP report client and
    file audit logger built from ``config``.
    """
    config = config or load_config()
    report_config = config.get("report", {})
    audit_config = config.get("audit", {})

    owned_client = None
    if request_report is None:
        owned_client = ReportClient.from_config(config)
        request_report = owned_client
    if audit is None and audit_config.get("enabled", True):
        audit = AuditLogger.from_config(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owned_client is not None:
            owned_client.close()

    app = FastAPI(
        title="JavaSlice API",
        description="Split Java sources into method segments and collect per-method reports",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.report_client = owned_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "audit": audit is not None}

    @app.post("/java/segments", response_model=SegmentsResponse)
    async def segments(request: SourceRequest):
        """Split a Java file into numbered method segments."""
        result = build_segments(request.source, request.path)
        return SegmentsResponse(
            path=request.path,
            count=len(result),
            segments=[s.to_dict() for s in result],
        )

    @app.post("/java/clean", response_model=CleanResponse)
    async def clean(request: SourceRequest):
        """Strip comments and imports, then list method blocks per class."""
        return CleanResponse(**process_java_file(request.source, request.path or "").to_dict())

    @app.post("/java/report", response_model=ReportResponse)
    def report(body: ReportRequest, request: Request):
        """Request one report per method and return the aggregate."""
        if not is_java_path(body.path):
            raise HTTPException(status_code=400, detail=f"Not a Java file: {body.path}")

        segments = build_segments(body.source, body.path)
        use_raw = body.useRaw if body.useRaw is not None else report_config.get("use_raw", False)
        batch = process_segments(
            segments,
            request_report,
            project_id=body.projectId or report_config.get("project_id", ""),
            project_name=body.projectName or report_config.get("project_name", ""),
            path=body.path,
            use_raw=use_raw,
        )

        if audit is not None:
            audit.log(
                ip=client_ip(request),
                action="REPORT",
                table="java_reports",
                data=[s.label for s in segments],
            )

        return ReportResponse(
            path=body.path,
            blocks=[
                ReportBlockResponse(
                    className=b.class_name,
                    signature=b.signature,
                    block=b.block,
                    report=b.report,
                )
                for b in batch.blocks
            ],
            combinedReport=batch.combined_report,
        )

    return app


def main():
    """Run the API server."""
    import uvicorn

    parser = argparse.ArgumentParser(description="JavaSlice REST API server")
    parser.add_argument("--host", default=None, help="Host to bind")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port to bind")
    parser.add_argument("--config", default=None, help="Config file path")

    args = parser.parse_args()
    config = load_config(args.config)
    server_config = config.get("server", {})

    uvicorn.run(
        create_app(config),
        host=args.host or server_config.get("host", "0.0.0.0"),
        port=args.port or server_config.get("port", 8000),
    )


if __name__ == "__main__":
    main()
