"""Main entry point for JavaSlice."""

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import load_config
from .report import ReportClient, process_segments
from .segmentation import Segment, build_segments, process_java_file

console = Console()


def discover_java_files(paths: list[str]) -> list[Path]:
    """Expand files and directories into a sorted list of ``.java`` files."""
    found: list[Path] = []
    for raw in paths:
        path = Path(raw).expanduser()
        if path.is_dir():
            found.extend(sorted(p for p in path.rglob("*.java") if p.is_file()))
        elif path.is_file():
            found.append(path)
        else:
            console.print(f"[yellow]Warning:[/yellow] Not found: {path}")
    return found


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        console.print(f"[red]Error:[/red] Could not read {path}: {e}")
        raise SystemExit(1)


def print_segments(path: Path, segments: list[Segment]) -> None:
    """Render the segment listing of one file as a table."""
    table = Table(title=f"{path} ({len(segments)} methods)")
    table.add_column("#", justify="right")
    table.add_column("Label")
    table.add_column("Lines", justify="right")
    table.add_column("Signature")

    for segment in segments:
        table.add_row(
            f"{segment.index}/{segment.total}",
            segment.label,
            f"{segment.start_line}-{segment.end_line}",
            segment.method_signature,
        )
    console.print(table)


def print_clean(path: Path, source: str) -> None:
    processed = process_java_file(source, str(path))
    console.print(f"[bold]{path}[/bold]")
    console.print(processed.cleaned_source, markup=False, highlight=False)
    for entry in processed.class_methods:
        console.print(f"\n[blue]{entry.class_name}[/blue]: {len(entry.methods)} methods")
        for method in entry.methods:
            console.print(f"  {method.signature}", markup=False)


def run_report(config: dict, path: Path, segments: list[Segment], args) -> str:
    """Send one file's segments to the report service and return the aggregate."""
    report_config = config.get("report", {})

    with ReportClient.from_config(config) as client, Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Reporting {path.name}...", total=None)

        def request_report(payload: dict):
            progress.update(task, description=f"Reporting {path.name}: {len(payload['content'])} chars")
            return client.generate_report(payload)

        batch = process_segments(
            segments,
            request_report,
            project_id=args.project_id or report_config.get("project_id", ""),
            project_name=args.project_name or report_config.get("project_name", ""),
            path=str(path),
            use_raw=args.raw or report_config.get("use_raw", False),
        )

    failed = sum(1 for b in batch.blocks if b.report.startswith("Error: "))
    if failed:
        console.print(f"[yellow]Warning:[/yellow] {failed} of {len(batch.blocks)} report requests failed")
    else:
        console.print(f"[green]✓[/green] {len(batch.blocks)} reports generated for {path}")
    return batch.combined_report


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="JavaSlice - split Java source files into method-level segments"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Java files or directories to segment",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print segments as JSON instead of a table",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Print the cleaned source and its method blocks",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Send each method to the report service and print the combined report",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Send unsanitized method text to the report service",
    )
    parser.add_argument("--project-id", help="Project id passed to the report service")
    parser.add_argument("--project-name", help="Project name passed to the report service")
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API server",
    )
    parser.add_argument("--host", help="Host to bind with --serve")
    parser.add_argument("--port", type=int, help="Port to bind with --serve")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.serve:
        import uvicorn
        from .api.server import create_app

        server_config = config.get("server", {})
        uvicorn.run(
            create_app(config),
            host=args.host or server_config.get("host", "0.0.0.0"),
            port=args.port or server_config.get("port", 8000),
        )
        return

    files = discover_java_files(args.paths)
    if not files:
        parser.print_help()
        return

    output: dict[str, list[dict]] = {}
    for path in files:
        source = read_source(path)

        if args.clean:
            print_clean(path, source)
            continue

        segments = build_segments(source, str(path))

        if args.report:
            combined = run_report(config, path, segments, args)
            console.print(combined, markup=False, highlight=False)
        elif args.json:
            output[str(path)] = [s.to_dict() for s in segments]
        else:
            print_segments(path, segments)

    if args.json and output:
        print(json.dumps(output, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
