"""JSONL logging for probe runs."""

import json
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


def get_log_path(script_name: str, base_path: Path | None = None) -> Path:
    """
    Get the log file path for a run.

    Args:
        script_name: Name used for the log file
        base_path: Base directory for logs (default: ~/var/log/check_iostat)

    Returns:
        Path to the log file: {base}/{date}/{script}.jsonl
    """
    if base_path is None:
        home = Path(os.environ.get("HOME", "/tmp"))
        base_path = home / "var" / "log" / "check_iostat"

    today = date.today().isoformat()
    return base_path / today / f"{script_name}.jsonl"


class ScriptLogger:
    """
    One JSON object per line, tagged with the pid so overlapping
    scheduler runs can be told apart. A disabled logger accepts every
    call and writes nothing.
    """

    def __init__(
        self,
        script_name: str,
        log_path: Path | None = None,
        enabled: bool = True,
    ):
        """
        Initialize logger.

        Args:
            script_name: Name recorded in every entry
            log_path: Path to log file (default: auto-generated)
            enabled: When False, no file is ever opened
        """
        self.script_name = script_name
        self.log_path = log_path or get_log_path(script_name)
        self.enabled = enabled
        self._file = None

    @classmethod
    def disabled(cls, script_name: str) -> "ScriptLogger":
        """Logger that discards everything."""
        return cls(script_name, log_path=Path(os.devnull), enabled=False)

    def _ensure_file(self) -> None:
        """Open the log file on first write."""
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled:
            return
        self._ensure_file()
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "script": self.script_name,
            "message": message,
            "pid": os.getpid(),
            **extra,
        }
        self._file.write(json.dumps(entry) + "\n")
        self._file.flush()

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ScriptLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
