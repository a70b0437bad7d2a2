"""Data models, errors and constants for artifact fetching."""

from dataclasses import dataclass
from pathlib import Path

PER_PAGE = 100  # Items requested per page when walking a collection
API_ACCEPT = "application/vnd.github.v3+json"

RATELIMIT_HEADERS = {
    "used": "x-ratelimit-used",
    "limit": "x-ratelimit-limit",
    "remaining": "x-ratelimit-remaining",
    "reset": "x-ratelimit-reset",
}


class NetworkError(Exception):
    """The transport layer could not complete a request (DNS, connection, timeout)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class ApiError(Exception):
    """A transported response whose status or body signals an API-level problem.

    Never raised by the request executor. Obtain one from
    ``RequestEnvelope.api_error`` and decide at the call site.
    """

    def __init__(self, status: int, message: str | None):
        super().__init__(f"GitHub API error {status}: {message}")
        self.status = status
        self.message = message


def _parse_int(value) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit counters reported by the server for a single response."""

    used: int | None = None
    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None

    @classmethod
    def from_headers(cls, headers) -> "RateLimitSnapshot":
        return cls(**{key: _parse_int(headers.get(name)) for key, name in RATELIMIT_HEADERS.items()})


@dataclass(frozen=True)
class PaginationLink:
    relation: str
    url: str
    page_number: int | None = None


@dataclass
class RequestEnvelope:
    """Normalized response from a single GET against the REST API."""

    data: dict | list
    status: int = 200
    ratelimit_used: int | None = None
    ratelimit_limit: int | None = None
    ratelimit_remaining: int | None = None
    ratelimit_reset: int | None = None
    links: dict[str, PaginationLink] | None = None

    @property
    def rate_limit(self) -> RateLimitSnapshot:
        return RateLimitSnapshot(
            used=self.ratelimit_used,
            limit=self.ratelimit_limit,
            remaining=self.ratelimit_remaining,
            reset=self.ratelimit_reset,
        )

    @property
    def items(self) -> list:
        """Records of a collection page; empty when ``data`` is not a list."""
        return self.data if isinstance(self.data, list) else []

    @property
    def api_error(self) -> ApiError | None:
        """The API-level error this response carries, if any."""
        message = self.data.get("message") if isinstance(self.data, dict) else None
        if not 200 <= self.status < 300:
            return ApiError(self.status, message)
        if message is not None and "id" not in self.data:
            return ApiError(self.status, message)
        return None


@dataclass(frozen=True)
class DownloadDescriptor:
    """Minimal tuple identifying one downloadable artifact."""

    repository: str
    id: int | None
    name: str | None
    url: str | None


@dataclass
class DownloadResult:
    """Outcome of one descriptor in a download run."""

    descriptor: DownloadDescriptor
    path: Path | None = None
    status: str = "error"  # downloaded | skipped | error
    error: str | None = None


@dataclass
class ArtifactInfo:
    file: str | None = None
    size: int | None = None
