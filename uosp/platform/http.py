"""HTTP access for patches published on the web.

- HttpClient: Protocol for fetching a resource as text
- RealHttpClient: urllib implementation
- MockHttpClient: canned responses for tests
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol

from uosp.core.result import Err, Ok, Result

__all__ = ["HttpClient", "HttpError", "MockHttpClient", "RealHttpClient", "is_http_url"]


def is_http_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


class HttpClient(Protocol):
    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch URL, following redirects, and decode it as UTF-8."""
        ...


class RealHttpClient:
    """HTTP client using urllib and the system certificates.

    Requests block until the server answers, like every other step.
    """

    def __init__(self, user_agent: str = "uosp") -> None:
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get_text(self, url: str) -> Result[str, HttpError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(req, context=self._ssl_context) as response:
                body: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            return Ok(body.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_text("https://review.opendev.org/x.patch", "diff --git ...")
    """

    def __init__(self) -> None:
        self._responses: dict[str, str | HttpError] = {}
        self.calls: list[str] = []

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._responses[url] = response

    def get_text(self, url: str) -> Result[str, HttpError]:
        self.calls.append(url)
        if url not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
