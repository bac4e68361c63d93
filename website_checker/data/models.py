"""
Core data models for website checks.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
from datetime import datetime, timezone

from website_checker.utils.errors import ValidationError


def utc_now() -> datetime:
    """Current wall-clock time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Job:
    """A target URL paired with the number of retries allowed after the first attempt."""
    url: str
    retry_budget: int = 0

    def __post_init__(self):
        if not self.url:
            raise ValidationError("Job url must not be empty")
        if self.retry_budget < 0:
            raise ValidationError(
                "Job retry_budget must be non-negative",
                {"url": self.url, "retry_budget": self.retry_budget}
            )

    @property
    def max_attempts(self) -> int:
        return self.retry_budget + 1


@dataclass(frozen=True)
class Reached:
    """The server answered; any HTTP status code counts."""
    status_code: int


@dataclass(frozen=True)
class Unreachable:
    """No HTTP response was received (connection, DNS, timeout, bad URL...)."""
    reason: str


CheckOutcome = Union[Reached, Unreachable]


@dataclass(frozen=True)
class AttemptRecord:
    """Outcome and timing of the last attempt made for a job."""
    outcome: CheckOutcome
    elapsed: float
    attempts: int

    @property
    def reached(self) -> bool:
        return isinstance(self.outcome, Reached)


@dataclass(frozen=True)
class CheckResult:
    """Final record for one job, handed from a worker unit to the collector."""
    url: str
    outcome: CheckOutcome
    response_time: float
    timestamp: datetime = field(default_factory=utc_now)
    attempts: int = 1
    worker_id: Optional[str] = None

    @property
    def reached(self) -> bool:
        return isinstance(self.outcome, Reached)

    @property
    def response_time_ms(self) -> int:
        """Response time truncated to whole milliseconds."""
        return int(self.response_time * 1000)
