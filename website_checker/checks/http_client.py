"""
HTTP check executor: one timed GET attempt per call.
"""

import time
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

from website_checker.data.models import CheckOutcome, Reached, Unreachable
from website_checker.utils.logging import get_logger


DEFAULT_USER_AGENT = "website-checker/1.0"


class CheckExecutor(ABC):
    """Performs a single reachability attempt against a URL."""

    @abstractmethod
    def check(self, url: str) -> Tuple[CheckOutcome, float]:
        """
        Perform exactly one attempt.

        Args:
            url: Target URL

        Returns:
            Tuple of (outcome, elapsed seconds)
        """
        pass

    def close(self) -> None:
        """Release any resources held by the executor."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class HTTPCheckExecutor(CheckExecutor):
    """
    Check executor backed by its own requests session.

    Any HTTP response, whatever the status code, is Reached. Only transport
    failures are Unreachable. The session is not shared between executors.
    """

    def __init__(self, timeout: Optional[float] = 10.0, user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize HTTP check executor.

        Args:
            timeout: Connect and read timeout in seconds, None to wait forever;
                zero or less fails every attempt
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = self._create_session()
        self.logger = get_logger(__name__)

    def _create_session(self) -> requests.Session:
        """Create a session that never retries on its own."""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({"User-Agent": self.user_agent})
        return session

    def _request_timeout(self) -> Optional[Tuple[float, float]]:
        if self.timeout is None:
            return None
        return (self.timeout, self.timeout)

    def check(self, url: str) -> Tuple[CheckOutcome, float]:
        start = time.monotonic()
        try:
            if self.timeout is not None and self.timeout <= 0:
                # a zero budget expires before any connection is attempted
                raise requests.exceptions.ConnectTimeout(f"timeout of {self.timeout}s expired before connecting")
            # stream=True: only the status line and headers are needed
            with self.session.get(url, timeout=self._request_timeout(), stream=True) as response:
                outcome: CheckOutcome = Reached(response.status_code)
        except requests.exceptions.RequestException as e:
            outcome = Unreachable(f"transport error: {e}")
        elapsed = time.monotonic() - start

        self.logger.debug(f"GET {url} -> {outcome} in {elapsed:.3f}s")
        return outcome, elapsed

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()
