"""
HTTP transport for the CDP Python SDK.
"""

from .http import ApiClient

__all__ = ["ApiClient"]
