"""Append-only, timestamp-prefixed error log shared by the batch steps."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def append_error(path: Path, message: str, *, now: datetime | None = None) -> None:
    """Append one `<timestamp> ERROR: <message>` line to *path*."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    stamp = (now or datetime.now()).strftime(TS_FORMAT)
    # keep the log one entry per line even for multi-line exception text
    flat = " ".join(str(message).split())
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{stamp} ERROR: {flat}\n")
