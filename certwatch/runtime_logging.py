from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import json


def write_run_log(log_dir: Path, command: str, payload: dict) -> Path:
    """Write one JSON document describing this run and return its path.

    Files are named <timestamp>_<command>.log; characters outside
    [A-Za-z0-9_-] in the command become underscores.
    """

    log_dir.mkdir(parents=True, exist_ok=True)
    started = datetime.now(timezone.utc)
    command_part = "".join(
        ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in command
    )
    path = log_dir / f"{started:%Y%m%d-%H%M%S-%f}_{command_part}.log"

    record = {"ts": started.isoformat(), "command": command, **payload}
    path.write_text(json.dumps(record, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
