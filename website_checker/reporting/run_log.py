"""
Run log: newline-delimited JSON records for one checking run, plus the
human-readable console line for each result.

The run log is written by a single thread, so it carries no lock.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from website_checker.data.models import CheckResult, Reached, utc_now
from website_checker.utils.errors import SinkWriteError
from website_checker.utils.logging import get_logger


logger = get_logger(__name__)


def _dumps(record: Dict[str, Any]) -> str:
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False)


def format_started_marker(
    worker_threads: int,
    timeout_secs: int,
    max_retries: int,
    timestamp: Optional[datetime] = None
) -> str:
    """Build the run-started JSON line."""
    return _dumps({
        "run_started": (timestamp or utc_now()).isoformat(),
        "worker_threads": worker_threads,
        "timeout_secs": timeout_secs,
        "max_retries": max_retries,
    })


def format_finished_marker(timestamp: Optional[datetime] = None) -> str:
    """Build the run-finished JSON line."""
    return _dumps({"run_finished": (timestamp or utc_now()).isoformat()})


def format_result(result: CheckResult) -> str:
    """
    Build the JSON line for one result.

    status holds the HTTP status code when the server answered and the
    failure reason otherwise.
    """
    if isinstance(result.outcome, Reached):
        status: Union[int, str] = result.outcome.status_code
    else:
        status = result.outcome.reason

    return _dumps({
        "url": result.url,
        "status": status,
        "response_time_ms": result.response_time_ms,
        "timestamp": result.timestamp.isoformat(),
    })


def format_duration(seconds: float) -> str:
    """Render a duration as milliseconds below one second, seconds otherwise."""
    if seconds < 1.0:
        return f"{seconds * 1000:.3f}ms"
    return f"{seconds:.3f}s"


def format_console_line(result: CheckResult) -> str:
    """Build the human-readable line for one result."""
    if isinstance(result.outcome, Reached):
        detail = f"status={result.outcome.status_code}"
    else:
        detail = f"error={result.outcome.reason}"

    return (
        f"[{result.timestamp.isoformat()}] {result.url} | {detail} "
        f"| rt={format_duration(result.response_time)}"
    )


class RunLog:
    """
    Append-only JSON lines file for a single run.

    Opening truncates any previous content. Every write is flushed so that a
    crash mid-run leaves complete lines behind.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize run log.

        Args:
            path: Output file path
        """
        self.path = Path(path)
        self._file: Optional[TextIO] = None
        self.lines_written = 0

    def open(self) -> "RunLog":
        """
        Create (or truncate) the output file.

        Raises:
            SinkWriteError: If the file cannot be opened
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, 'w', encoding='utf-8')
        except OSError as e:
            raise SinkWriteError(
                f"Failed to open run log {self.path}: {e}",
                {"path": str(self.path)}
            ) from e

        logger.debug(f"Run log opened at {self.path}")
        return self

    def write_line(self, line: str) -> None:
        """
        Write one record.

        Raises:
            SinkWriteError: If the log is not open or the write fails
        """
        if self._file is None:
            raise SinkWriteError(f"Run log {self.path} is not open", {"path": str(self.path)})

        try:
            self._file.write(line + "\n")
            self._file.flush()
        except OSError as e:
            raise SinkWriteError(
                f"Failed to write run log {self.path}: {e}",
                {"path": str(self.path)}
            ) from e
        self.lines_written += 1

    def write_started(self, worker_threads: int, timeout_secs: int, max_retries: int) -> None:
        self.write_line(format_started_marker(worker_threads, timeout_secs, max_retries))

    def write_result(self, result: CheckResult) -> None:
        self.write_line(format_result(result))

    def write_finished(self) -> None:
        self.write_line(format_finished_marker())

    def close(self) -> None:
        """Close the file. Safe to call more than once."""
        if self._file is not None:
            try:
                self._file.close()
            finally:
                self._file = None

    def __enter__(self):
        """Context manager entry."""
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
