"""
Data models and target list loading.
"""

from .models import Job, Reached, Unreachable, CheckOutcome, AttemptRecord, CheckResult
from .targets import load_urls, parse_urls

__all__ = [
    'Job',
    'Reached',
    'Unreachable',
    'CheckOutcome',
    'AttemptRecord',
    'CheckResult',
    'load_urls',
    'parse_urls'
]
