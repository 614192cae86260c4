"""Platform layer: external process execution and HTTP access."""

from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient, is_http_url
from .process import ProcessError, run, run_streaming

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "ProcessError",
    "RealHttpClient",
    "is_http_url",
    "run",
    "run_streaming",
]
