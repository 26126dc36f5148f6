"""
Error recovery components for the CDP SDK.

Provides the retry policies used by the HTTP transport.
"""

from .retry import RetryPolicy, ExponentialBackoff, FixedBackoff, MaxRetriesExceeded

__all__ = [
    "RetryPolicy",
    "ExponentialBackoff",
    "FixedBackoff",
    "MaxRetriesExceeded",
]
