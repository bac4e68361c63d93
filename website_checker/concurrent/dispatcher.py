"""
Dispatcher: turns the target list into jobs on the shared job channel.
"""

from typing import Iterable

from website_checker.data.models import Job
from website_checker.utils.logging import get_logger
from .thread_safe import Channel


logger = get_logger(__name__)


class Dispatcher:
    """Sole producer of jobs. Closes the job channel once every job is submitted."""

    def __init__(self, jobs: Channel, retry_budget: int):
        """
        Initialize dispatcher.

        Args:
            jobs: Channel the worker units read from
            retry_budget: Retries allowed per job after the first attempt
        """
        self.jobs = jobs
        self.retry_budget = retry_budget

    def dispatch(self, urls: Iterable[str]) -> int:
        """
        Submit one job per URL in input order, then close the job channel.

        Args:
            urls: Target URLs

        Returns:
            Number of jobs submitted
        """
        submitted = 0
        try:
            for url in urls:
                self.jobs.send(Job(url=url, retry_budget=self.retry_budget))
                submitted += 1
        finally:
            # Workers treat the close as end of input, even after a failure
            self.jobs.close()

        logger.debug(f"Dispatched {submitted} jobs with retry budget {self.retry_budget}")
        return submitted
