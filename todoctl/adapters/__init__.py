"""
Adapters for external services and third-party libraries.
"""
from todoctl.adapters.http_client import (
    AsyncHTTPClientAdapter,
    HttpxAsyncClientAdapter,
    HTTPClientAdapterFactory,
)

__all__ = [
    "AsyncHTTPClientAdapter",
    "HttpxAsyncClientAdapter",
    "HTTPClientAdapterFactory",
]
