"""
Worker units and the fixed-size pool that runs them.
"""

import threading
import time
from typing import Callable, Dict, List, Optional, Any

from website_checker.checks.http_client import CheckExecutor
from website_checker.checks.retry import RetryController
from website_checker.data.models import CheckResult, Job, Unreachable, AttemptRecord
from website_checker.utils.errors import ChannelClosedError, CheckerError
from website_checker.utils.logging import get_logger
from .models import WorkerState, WorkerStatus
from .thread_safe import Channel


logger = get_logger(__name__)


class WorkerUnit(threading.Thread):
    """
    Pulls jobs from the shared job channel, runs them through its retry
    controller and publishes one result per job.

    States: idle -> executing -> publishing -> idle, ending in stopped once the
    job channel is closed and drained. A closed result channel is fatal to the
    unit: it logs the loss and stops without retrying the publish.
    """

    def __init__(
        self,
        worker_id: str,
        jobs: Channel,
        results: Channel,
        executor: CheckExecutor
    ):
        """
        Initialize worker unit.

        Args:
            worker_id: Unique identifier for this worker
            jobs: Channel to receive jobs from
            results: Channel to publish results to
            executor: Check executor owned by this worker alone
        """
        super().__init__(name=f"CheckWorker-{worker_id}", daemon=True)

        self.worker_id = worker_id
        self.jobs = jobs
        self.results = results
        self.executor = executor
        self.retry_controller = RetryController(executor)

        self.status = WorkerStatus(worker_id=worker_id)
        self.logger = get_logger(f"{__name__}.{worker_id}")

    def run(self) -> None:
        """Main worker loop."""
        self.logger.debug(f"Worker {self.worker_id} starting")
        self.status.state = WorkerState.IDLE
        self.status.update_activity()

        try:
            while True:
                try:
                    job = self.jobs.recv()
                except ChannelClosedError:
                    break

                if not self._process_job(job):
                    break
        finally:
            self.status.stop()
            self.results.detach_sender()
            self.executor.close()
            self.logger.debug(
                f"Worker {self.worker_id} stopped after {self.status.jobs_completed} jobs"
            )

    def _process_job(self, job: Job) -> bool:
        """
        Run one job and publish its result.

        Returns:
            False if the result channel is closed and the worker must stop
        """
        self.status.start_job(job.url)
        start_time = time.monotonic()

        try:
            record = self.retry_controller.run(job)
        except Exception as e:
            self.logger.error(f"Worker {self.worker_id} check of {job.url} failed: {e}")
            record = AttemptRecord(
                outcome=Unreachable(f"internal error: {e}"),
                elapsed=time.monotonic() - start_time,
                attempts=1
            )

        result = CheckResult(
            url=job.url,
            outcome=record.outcome,
            response_time=record.elapsed,
            attempts=record.attempts,
            worker_id=self.worker_id
        )

        self.status.start_publishing()
        try:
            self.results.send(result)
        except ChannelClosedError:
            message = f"results receiver closed, dropping result for {job.url}"
            self.logger.error(f"Worker {self.worker_id}: {message}; exiting")
            self.status.set_error_state(message)
            return False

        self.status.complete_job(time.monotonic() - start_time)
        return True

    def get_stats(self) -> Dict[str, Any]:
        """
        Get worker statistics.

        Returns:
            Dictionary with worker stats
        """
        stats = self.status.to_dict()
        stats["is_alive"] = self.is_alive()
        return stats


class WorkerPool:
    """Fixed-size pool of worker units sharing one job and one result channel."""

    def __init__(
        self,
        size: int,
        jobs: Channel,
        results: Channel,
        executor_factory: Callable[[], CheckExecutor]
    ):
        """
        Initialize worker pool.

        Args:
            size: Number of worker units, at least 1
            jobs: Shared job channel
            results: Shared result channel
            executor_factory: Builds a fresh executor for each worker
        """
        if size < 1:
            raise CheckerError("Worker pool size must be at least 1", {"size": size})

        self.size = size
        self.jobs = jobs
        self.results = results
        self.executor_factory = executor_factory
        self.logger = get_logger(__name__)

        self._workers: Dict[str, WorkerUnit] = {}
        self._lock = threading.RLock()

    def create_workers(self) -> List[WorkerUnit]:
        """
        Create worker units and register each as a result producer.

        Returns:
            List of created worker units

        Raises:
            CheckerError: If workers were already created
        """
        with self._lock:
            if self._workers:
                raise CheckerError("Workers already created")

            self.logger.debug(f"Creating {self.size} worker units")

            created_workers = []
            try:
                for i in range(self.size):
                    worker_id = f"worker-{i}"
                    worker = WorkerUnit(
                        worker_id=worker_id,
                        jobs=self.jobs,
                        results=self.results,
                        executor=self.executor_factory()
                    )
                    # Registered before start so the result channel cannot close early
                    self.results.attach_sender()
                    self._workers[worker_id] = worker
                    created_workers.append(worker)
            except Exception:
                self.logger.error(f"Worker creation failed after {len(created_workers)} workers")
                # unstarted workers never reach run(), so release what they hold here
                for worker in created_workers:
                    self.results.detach_sender()
                    worker.executor.close()
                self._workers.clear()
                raise

            return created_workers

    def start_workers(self) -> None:
        """Start all created worker units."""
        with self._lock:
            if not self._workers:
                raise CheckerError("No workers created")

            for worker in self._workers.values():
                worker.start()

            self.logger.info(f"Started {len(self._workers)} worker units")

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for every worker unit to stop.

        Args:
            timeout: Optional total wait in seconds

        Returns:
            True if all workers have stopped
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for worker in list(self._workers.values()):
            if worker.ident is None:
                # never started
                continue
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)

        alive = [w.worker_id for w in self._workers.values() if w.is_alive()]
        if alive:
            self.logger.warning(f"Workers still running after join: {alive}")
            return False
        return True

    def get_worker_status(self) -> Dict[str, WorkerStatus]:
        """
        Get status of all workers.

        Returns:
            Dictionary mapping worker IDs to their status
        """
        with self._lock:
            return {worker_id: worker.status for worker_id, worker in self._workers.items()}

    def is_running(self) -> bool:
        """True if any worker unit is still alive."""
        with self._lock:
            return any(worker.is_alive() for worker in self._workers.values())

    def get_pool_stats(self) -> Dict[str, Any]:
        """
        Get pool statistics.

        Returns:
            Dictionary with pool statistics
        """
        with self._lock:
            worker_states = {}
            for state in WorkerState:
                worker_states[state.value] = len([
                    w for w in self._workers.values()
                    if w.status.state == state
                ])

            return {
                "total_workers": len(self._workers),
                "workers_started": sum(1 for w in self._workers.values() if w.ident is not None),
                "worker_states": worker_states,
                "total_jobs_completed": sum(w.status.jobs_completed for w in self._workers.values()),
                "running": any(w.is_alive() for w in self._workers.values())
            }
