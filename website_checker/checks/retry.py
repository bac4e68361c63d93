"""
Retry controller: runs a job's attempts until the server answers or the
budget is spent.
"""

from website_checker.checks.http_client import CheckExecutor
from website_checker.data.models import AttemptRecord, Job, Reached
from website_checker.utils.logging import get_logger


logger = get_logger(__name__)


class RetryController:
    """
    Drives repeated check attempts for a job.

    Any Reached outcome ends the loop, including 4xx/5xx responses: retries
    only absorb transport failures. Attempts follow each other immediately.
    """

    def __init__(self, executor: CheckExecutor):
        """
        Initialize retry controller.

        Args:
            executor: Executor used for every attempt
        """
        self.executor = executor

    def run(self, job: Job) -> AttemptRecord:
        """
        Attempt a job up to job.max_attempts times.

        Args:
            job: Job to run

        Returns:
            Outcome and elapsed time of the last attempt made
        """
        attempts = 0
        while True:
            outcome, elapsed = self.executor.check(job.url)
            attempts += 1

            if isinstance(outcome, Reached):
                break
            if attempts >= job.max_attempts:
                logger.debug(f"{job.url} unreachable after {attempts} attempts: {outcome.reason}")
                break

            logger.debug(f"{job.url} attempt {attempts}/{job.max_attempts} failed: {outcome.reason}")

        return AttemptRecord(outcome=outcome, elapsed=elapsed, attempts=attempts)
