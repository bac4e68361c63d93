"""
Run log sink and result formatting.
"""

from .run_log import (
    RunLog,
    format_started_marker,
    format_finished_marker,
    format_result,
    format_console_line,
    format_duration
)

__all__ = [
    'RunLog',
    'format_started_marker',
    'format_finished_marker',
    'format_result',
    'format_console_line',
    'format_duration'
]
