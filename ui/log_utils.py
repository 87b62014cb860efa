"""Shared logging utilities."""

import json
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def write_prerender_log(
    url: str,
    user_agent: str,
    *,
    source: str,
    status: int,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single prerender log entry, grouped by requested host."""
    payload = {
        "timestamp": _utc_now(),
        "url": url,
        "user_agent": user_agent,
        "source": source,
        "status": status,
    }
    return _write_json(_host_folder(log_root / "prerender", url), payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path = CLI_LOG_FILE,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove logs left over from a previous run."""
    if log_root.exists():
        shutil.rmtree(log_root)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _host_folder(base: Path, url: str) -> Path:
    host = urlsplit(url).hostname
    if host:
        return base / host
    return base


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
