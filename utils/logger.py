"""Logger that writes to both console and timestamped log files."""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, TextIO

from config import settings

# Default logs directory, next to the server sources
DEFAULT_LOGS_DIR = Path(__file__).parent.parent / "logs"


class Logger:
    """
    Logger that writes to both console and a timestamped log file.

    Console lines are human-readable; the file holds one JSON object per line.
    A new log file is created each time the server starts and files older
    than the retention period are deleted.
    """

    def __init__(
        self,
        logs_dir: Optional[Path] = None,
        retention_days: int = settings.log_retention_days,
    ):
        self._log_file: Optional[TextIO] = None
        self._log_file_path: Optional[str] = None
        self._logs_dir = logs_dir or DEFAULT_LOGS_DIR
        self._retention_days = retention_days
        self._init_log_file()
        self._clean_old_logs()

    def _init_log_file(self) -> None:
        """Open a fresh timestamped log file."""
        self._logs_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().isoformat().replace(":", "-").replace(".", "-")
        self._log_file_path = str(self._logs_dir / f"completion-{timestamp}.log")
        self._log_file = open(self._log_file_path, "a", encoding="utf-8")

    def _clean_old_logs(self) -> None:
        """Delete log files older than the retention period."""
        max_age_seconds = self._retention_days * 24 * 60 * 60
        now = datetime.now().timestamp()

        for file in self._logs_dir.glob("*.log"):
            if str(file) == self._log_file_path:
                continue
            try:
                if now - file.stat().st_mtime > max_age_seconds:
                    file.unlink()
                    print(f"[Logger] Deleted old log file: {file.name}")
            except OSError:
                # Another server instance may have removed it already
                continue

    def _write(self, level: str, msg: str, data: Optional[dict[str, Any]] = None) -> None:
        """Write a log message to console and file."""
        timestamp = datetime.now().isoformat()

        data_str = " " + json.dumps(data, default=str) if data else ""
        console_log = f"[{timestamp}] {level}: {msg}{data_str}"

        if level in ("ERROR", "WARN"):
            print(console_log, file=sys.stderr)
        else:
            print(console_log)

        if self._log_file:
            structured_log = {
                "timestamp": timestamp,
                "level": level,
                "message": msg,
                **(data or {}),
            }
            self._log_file.write(json.dumps(structured_log, default=str) + "\n")
            self._log_file.flush()

    def info(self, msg: str, data: Optional[dict[str, Any]] = None) -> None:
        """Log an info message."""
        self._write("INFO", msg, data)

    def debug(self, msg: str, data: Optional[dict[str, Any]] = None) -> None:
        """Log a debug message."""
        self._write("DEBUG", msg, data)

    def warn(self, msg: str, data: Optional[dict[str, Any]] = None) -> None:
        """Log a warning message."""
        self._write("WARN", msg, data)

    def error(self, msg: str, data: Optional[dict[str, Any]] = None) -> None:
        """Log an error message."""
        self._write("ERROR", msg, data)

    def get_log_file_path(self) -> Optional[str]:
        """Get the current log file path."""
        return self._log_file_path

    def get_logs_dir(self) -> str:
        """Get the logs directory path."""
        return str(self._logs_dir)

    def close(self) -> None:
        """Close the log stream. Call this during graceful shutdown."""
        if self._log_file:
            self._log_file.close()
            self._log_file = None


# Shared logger instance
log = Logger()
