"""
Reachability checks: single-attempt executors and the retry policy.
"""

from .http_client import CheckExecutor, HTTPCheckExecutor
from .retry import RetryController

__all__ = [
    'CheckExecutor',
    'HTTPCheckExecutor',
    'RetryController'
]
