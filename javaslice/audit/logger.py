"""Best-effort audit log written to the console and to size-capped daily files."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from rich.console import Console

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 1024 * 1024
DEFAULT_MAX_ENTRIES = 50
MAPPED_IPV4_PREFIX = "::ffff:"


def normalise_ip(ip: Any) -> str:
    """First forwarded address, without the IPv4-mapped IPv6 prefix."""
    if not isinstance(ip, str):
        return "unknown"
    first = ip.strip().split(",")[0].strip()
    if not first:
        return "unknown"
    if first.startswith(MAPPED_IPV4_PREFIX):
        return first[len(MAPPED_IPV4_PREFIX):]
    return first


def normalise_payload(data: Any, max_entries: int = DEFAULT_MAX_ENTRIES) -> list:
    """Coerce ``data`` into a list, truncated to ``max_entries`` items."""
    if isinstance(data, (list, tuple)):
        trimmed = list(data[:max(0, max_entries)])
        if len(data) > len(trimmed):
            trimmed.append(f"...+{len(data) - len(trimmed)}")
        return trimmed
    if data is None:
        return []
    return [data]


class AuditLogger:
    """Append one line per recorded action under ``logs/YYYYMMDD/``."""

    def __init__(
        self,
        log_root: Path | str = "logs",
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        console: Console | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.log_root = Path(log_root)
        self.max_bytes = max_bytes
        self.max_entries = max_entries
        self.console = console or Console()
        self.clock = clock

    @classmethod
    def from_config(cls, config: dict, **kwargs) -> "AuditLogger":
        audit_config = config.get("audit", {})
        return cls(
            log_root=audit_config.get("log_root", "logs"),
            max_bytes=audit_config.get("max_bytes", DEFAULT_MAX_BYTES),
            max_entries=audit_config.get("max_entries", DEFAULT_MAX_ENTRIES),
            **kwargs,
        )

    def format_line(self, now: datetime, ip: Any, action: Any, table: Any, data: Any) -> str:
        payload = json.dumps(
            normalise_payload(data, self.max_entries),
            ensure_ascii=False,
            separators=(",", ":"),
            default=str,
        )
        return (
            f"[{now:%Y-%m-%d %H:%M:%S}] [INFO] [SQL] "
            f"ip={normalise_ip(ip)} action={action or 'UNKNOWN'} "
            f"table={table or 'unknown'} data={payload}"
        )

    def resolve_log_file(self, date_stamp: str) -> Path:
        """Current batch file for ``date_stamp``, rolling over when full."""
        day_dir = self.log_root / date_stamp
        day_dir.mkdir(parents=True, exist_ok=True)

        pattern = re.compile(rf"^{date_stamp}_log_(\d+)$")
        batches = [
            int(match.group(1))
            for match in (pattern.match(p.name) for p in day_dir.iterdir())
            if match
        ]
        batch = max(batches) if batches else 1

        try:
            if (day_dir / f"{date_stamp}_log_{batch}").stat().st_size >= self.max_bytes:
                batch += 1
        except OSError:
            pass

        return day_dir / f"{date_stamp}_log_{batch}"

    def log(self, ip: Any = None, action: Any = None, table: Any = None, data: Any = None) -> None:
        """Record one action. Failures are reported as warnings, never raised."""
        try:
            now = self.clock()
            line = self.format_line(now, ip, action, table, data)
            self.console.print(line, markup=False, highlight=False, soft_wrap=True)

            log_file = self.resolve_log_file(f"{now:%Y%m%d}")
            with log_file.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception as e:
            logger.warning("Failed to write audit log: %s", e)

    __call__ = log
