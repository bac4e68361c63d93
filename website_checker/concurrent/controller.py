"""
Run coordinator.
Wires the dispatcher, worker pool and result collector together for one run.
"""

from typing import Callable, Iterable, Optional, TextIO

from config import RunConfig
from website_checker.checks.http_client import CheckExecutor, HTTPCheckExecutor
from website_checker.data.models import utc_now
from website_checker.reporting.run_log import RunLog
from website_checker.utils.logging import get_logger
from .collector import ResultCollector
from .dispatcher import Dispatcher
from .models import RunReport
from .thread_pool import WorkerPool
from .thread_safe import Channel


logger = get_logger(__name__)


class RunCoordinator:
    """
    Runs one batch of checks from start to finish.

    The calling thread dispatches the jobs and then collects results; the
    worker units run on their own threads. The run-finished marker is only
    written after every worker unit has stopped.
    """

    def __init__(
        self,
        config: RunConfig,
        executor_factory: Optional[Callable[[], CheckExecutor]] = None,
        console: Optional[TextIO] = None
    ):
        """
        Initialize run coordinator.

        Args:
            config: Run configuration
            executor_factory: Builds one executor per worker unit; defaults
                to an HTTP executor using the configured timeout
            console: Stream for human-readable result lines, None for none
        """
        self.config = config
        self.executor_factory = executor_factory or self._create_http_executor
        self.console = console
        self.logger = get_logger(__name__)

    def _create_http_executor(self) -> CheckExecutor:
        return HTTPCheckExecutor(timeout=self.config.timeout)

    def run(self, urls: Iterable[str]) -> RunReport:
        """
        Check every URL once (plus retries) and write the run log.

        Args:
            urls: Target URLs, duplicates allowed

        Returns:
            Report for the run; an empty report when there are no targets

        Raises:
            SinkWriteError: If the run log cannot be opened or written
        """
        urls = list(urls)
        if not urls:
            self.logger.info("No targets to check; skipping run")
            return RunReport.empty()

        worker_threads = self.config.effective_worker_threads
        report = RunReport(targets_submitted=len(urls))

        with RunLog(self.config.log_file) as run_log:
            run_log.write_started(
                worker_threads,
                self.config.request_timeout_secs,
                self.config.max_retries
            )
            self.logger.info(
                f"Run started: {len(urls)} targets, {worker_threads} workers, "
                f"timeout={self.config.request_timeout_secs}s, max_retries={self.config.max_retries}"
            )

            jobs = Channel("jobs")
            results = Channel("results")
            pool = WorkerPool(worker_threads, jobs, results, self.executor_factory)
            collector = ResultCollector(results, run_log, self.console)

            try:
                pool.create_workers()
                pool.start_workers()
                Dispatcher(jobs, self.config.max_retries).dispatch(urls)
                collector.collect()
            except BaseException as e:
                # Nobody reads results any more: drop queued jobs and stop publishers
                dropped = jobs.clear()
                results.close()
                self.logger.error(
                    f"Run aborted ({type(e).__name__}); {dropped} queued targets dropped"
                )
                raise
            finally:
                # No-op after a normal dispatch; unblocks idle workers otherwise
                jobs.close()
                pool.join()

            run_log.write_finished()

        report.finished_at = utc_now()
        report.results_written = collector.collected
        report.reached = collector.reached
        report.unreachable = collector.unreachable
        report.worker_stats = pool.get_worker_status()

        self._log_summary(report)
        return report

    def _log_summary(self, report: RunReport) -> None:
        self.logger.info(
            f"Run finished: {report.results_written}/{report.targets_submitted} results, "
            f"{report.reached} reached, {report.unreachable} unreachable "
            f"in {report.get_execution_time():.2f}s"
        )
        if not report.is_complete():
            self.logger.warning(
                f"{report.targets_submitted - report.results_written} targets produced no result"
            )
        for status in report.worker_stats.values():
            self.logger.debug(f"Worker stats: {status.to_dict()}")
