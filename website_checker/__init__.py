"""
Concurrent website health checker.
"""

__version__ = "0.1.0"
