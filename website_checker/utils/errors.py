"""
Custom exception classes for the website checker.
"""

from typing import Optional, Dict, Any


class WebsiteCheckerError(Exception):
    """Base exception for all website checker errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CheckerError(WebsiteCheckerError):
    """Exception raised when the worker pool or run coordinator is misused."""
    pass


class ConfigurationError(WebsiteCheckerError):
    """Exception raised for configuration-related issues."""
    pass


class TargetListError(ConfigurationError):
    """Exception raised when the target list cannot be read."""
    pass


class ValidationError(WebsiteCheckerError):
    """Exception raised for data validation failures."""
    pass


class ChannelClosedError(WebsiteCheckerError):
    """Raised on send to a closed channel or receive from a closed, drained one."""
    pass


class SinkWriteError(WebsiteCheckerError):
    """Exception raised when the run log cannot be written."""
    pass
