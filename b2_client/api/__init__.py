"""
B2 API client layer.

Provides async HTTP communication with the B2 API.
"""

from b2_client.api.http_client import AsyncHttpClient, sanitize_for_log

__all__ = ["AsyncHttpClient", "sanitize_for_log"]
