"""
Data models for the concurrent worker pool.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from datetime import datetime
from enum import Enum

from website_checker.data.models import utc_now


class WorkerState(Enum):
    """Worker unit state."""
    STARTING = "starting"
    IDLE = "idle"
    EXECUTING = "executing"
    PUBLISHING = "publishing"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass
class WorkerStatus:
    """Status information for a worker unit."""
    worker_id: str
    state: WorkerState = WorkerState.STARTING
    current_url: Optional[str] = None
    jobs_completed: int = 0
    last_activity: datetime = field(default_factory=utc_now)
    created_at: datetime = field(default_factory=utc_now)
    error_message: Optional[str] = None
    total_execution_time: float = 0.0

    def update_activity(self) -> None:
        """Update last activity timestamp."""
        self.last_activity = utc_now()

    def start_job(self, url: str) -> None:
        """Mark worker as executing a job."""
        self.state = WorkerState.EXECUTING
        self.current_url = url
        self.update_activity()

    def start_publishing(self) -> None:
        self.state = WorkerState.PUBLISHING
        self.update_activity()

    def complete_job(self, execution_time: float = 0.0) -> None:
        """Mark the current job as handed off and return to idle."""
        self.state = WorkerState.IDLE
        self.current_url = None
        self.jobs_completed += 1
        self.total_execution_time += execution_time
        self.update_activity()

    def set_error_state(self, error_message: str) -> None:
        """Set worker to error state."""
        self.state = WorkerState.ERROR
        self.error_message = error_message
        self.update_activity()

    def stop(self) -> None:
        # ERROR is terminal too; keep it visible
        if self.state != WorkerState.ERROR:
            self.state = WorkerState.STOPPED
        self.current_url = None
        self.update_activity()

    def get_average_job_time(self) -> float:
        """Get average job execution time in seconds."""
        if self.jobs_completed > 0:
            return self.total_execution_time / self.jobs_completed
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "worker_id": self.worker_id,
            "state": self.state.value,
            "jobs_completed": self.jobs_completed,
            "average_job_time": self.get_average_job_time(),
            "error_message": self.error_message,
            "last_activity": self.last_activity.isoformat(),
        }


@dataclass
class RunReport:
    """Overall result of one checking run."""
    targets_submitted: int
    results_written: int = 0
    reached: int = 0
    unreachable: int = 0
    started_at: datetime = field(default_factory=utc_now)
    finished_at: Optional[datetime] = None
    worker_stats: Dict[str, WorkerStatus] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "RunReport":
        now = utc_now()
        return cls(targets_submitted=0, started_at=now, finished_at=now)

    def get_execution_time(self) -> float:
        """Get run duration in seconds."""
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def get_reach_rate(self) -> float:
        """Get percentage of targets that answered."""
        if self.results_written == 0:
            return 0.0
        return (self.reached / self.results_written) * 100.0

    def is_complete(self) -> bool:
        """True when every submitted target produced a result."""
        return self.results_written == self.targets_submitted
