"""
Result collector: the single consumer of the result channel.
"""

from typing import Optional, TextIO

from website_checker.data.models import CheckResult
from website_checker.reporting.run_log import RunLog, format_console_line
from website_checker.utils.errors import SinkWriteError
from website_checker.utils.logging import get_logger
from .thread_safe import Channel


logger = get_logger(__name__)


class ResultCollector:
    """
    Drains the result channel into the run log and, optionally, a console
    stream, in arrival order.

    collect() returns once every producer has detached and the channel is
    empty. Only the thread calling collect() writes output, so no lock is
    needed around the run log.
    """

    def __init__(self, results: Channel, run_log: RunLog, console: Optional[TextIO] = None):
        """
        Initialize result collector.

        Args:
            results: Channel the worker units publish to
            run_log: Open run log receiving one JSON line per result
            console: Stream receiving one human-readable line per result
        """
        self.results = results
        self.run_log = run_log
        self.console = console

        self.collected = 0
        self.reached = 0
        self.unreachable = 0

    def collect(self) -> int:
        """
        Consume results until the channel is exhausted.

        Returns:
            Number of results written

        Raises:
            SinkWriteError: If the run log cannot be written; the result
                channel is closed first so producers stop instead of blocking
        """
        for result in self.results:
            try:
                self._write(result)
            except SinkWriteError:
                logger.error("Run log write failed, closing result channel")
                self.results.close()
                raise

        logger.debug(f"Result channel exhausted after {self.collected} results")
        return self.collected

    def _write(self, result: CheckResult) -> None:
        self.run_log.write_result(result)

        if self.console is not None:
            print(format_console_line(result), file=self.console, flush=True)

        self.collected += 1
        if result.reached:
            self.reached += 1
        else:
            self.unreachable += 1
