"""
Concurrent checking engine.

Main Components:
- RunCoordinator: wires one run together and writes the run markers
- Dispatcher: sole producer of jobs
- WorkerPool / WorkerUnit: fixed-size pool of checking threads
- ResultCollector: sole consumer of results and sole writer of output
- Channel: closable thread-safe queue shared between them
"""

from .models import WorkerState, WorkerStatus, RunReport
from .thread_safe import Channel
from .dispatcher import Dispatcher
from .collector import ResultCollector
from .thread_pool import WorkerPool, WorkerUnit
from .controller import RunCoordinator

__all__ = [
    # Models
    'WorkerState',
    'WorkerStatus',
    'RunReport',

    # Thread-safe utilities
    'Channel',

    # Main components
    'Dispatcher',
    'ResultCollector',
    'WorkerPool',
    'WorkerUnit',
    'RunCoordinator'
]
