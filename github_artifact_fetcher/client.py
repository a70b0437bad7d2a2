"""GitHub REST API client with pagination and rate-limit tracking using httpx."""

from contextlib import contextmanager

import httpx

from .links import last_page, parse_link_header
from .models import (
    API_ACCEPT,
    PER_PAGE,
    ArtifactInfo,
    NetworkError,
    RateLimitSnapshot,
    RequestEnvelope,
)
from .rate_limit import RateLimitTracker
from .settings import get_settings


def _decode_body(resp: httpx.Response) -> dict | list:
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError:
        return {"message": resp.text}


def page_url(base_url: str, page: int) -> str:
    """Collection URL for one page at the fixed page size."""
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}q=&per_page={PER_PAGE}&page={page}"


class GitHubRestClient:
    """Sequential client for paginated GitHub REST collections.

    Every request carries the token given at construction (or GITHUB_TOKEN).
    Pagination requests update the internal rate-limit snapshot,
    ``get_results`` updates the external one.
    """

    def __init__(self, token=None, timeout=None, transport=None):
        settings = get_settings()
        token = token or settings.github_token
        if not token:
            raise RuntimeError("GITHUB_TOKEN is not set")
        self.api_url = settings.github_api_url.rstrip("/")
        self.rate_limits = RateLimitTracker()
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": API_ACCEPT,
                "Content-Type": "application/json",
                "User-Agent": settings.user_agent,
            },
            timeout=timeout or settings.request_timeout,
            transport=transport,
        )

    def fetch_response(self, url: str) -> RequestEnvelope:
        """Issue one GET and normalize the response.

        Non-2xx statuses and error bodies come back as ordinary data; only
        transport failures raise (NetworkError). No rate-limit bookkeeping.
        """
        try:
            resp = self._client.get(url)
        except httpx.TransportError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e

        snapshot = RateLimitSnapshot.from_headers(resp.headers)
        return RequestEnvelope(
            data=_decode_body(resp),
            status=resp.status_code,
            ratelimit_used=snapshot.used,
            ratelimit_limit=snapshot.limit,
            ratelimit_remaining=snapshot.remaining,
            ratelimit_reset=snapshot.reset,
            links=parse_link_header(resp.headers.get("link")),
        )

    def get_results(self, url: str) -> RequestEnvelope:
        """Fetch a single resource on behalf of the caller."""
        envelope = self.fetch_response(url)
        self.rate_limits.record_external(envelope.rate_limit)
        return envelope

    def get_latest_release(self, repository: str) -> RequestEnvelope:
        return self.get_results(f"{self.api_url}/repos/{repository}/releases/latest")

    def _fetch_page(self, base_url: str, page: int) -> RequestEnvelope:
        envelope = self.fetch_response(page_url(base_url, page))
        self.rate_limits.record_internal(envelope.rate_limit)
        return envelope

    def iter_pages(self, base_url: str):
        """Yield each page envelope of a collection, in ascending page order.

        Page 0 is fetched first to discover the ``last`` page number N, then
        pages 0..N-1 are fetched again in order (page 0 twice).
        """
        first = self._fetch_page(base_url, 0)
        total_pages = last_page(first.links)
        if total_pages is None:
            yield first
            return
        for page in range(total_pages):
            yield self._fetch_page(base_url, page)

    def paginate(self, base_url: str) -> list:
        """Collect every record of a paginated collection.

        All or nothing: a NetworkError on any page propagates and the records
        gathered so far are dropped.
        """
        results = []
        for envelope in self.iter_pages(base_url):
            results.extend(envelope.items)
        return results

    def get_total(self, base_url: str) -> int:
        """Number of records in a paginated collection."""
        return sum(len(envelope.items) for envelope in self.iter_pages(base_url))

    @contextmanager
    def stream(self, url: str):
        """Stream a (possibly redirected) binary body. Transport failures raise NetworkError."""
        try:
            with self._client.stream("GET", url, follow_redirects=True) as resp:
                yield resp
        except httpx.TransportError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e

    def fetch_artifact_info(self, url: str) -> ArtifactInfo:
        """Filename and size advertised for an artifact, without reading the body."""
        with self.stream(url) as resp:
            disposition = resp.headers.get("content-disposition") or ""
            _, _, filename = disposition.partition("filename=")
            size = resp.headers.get("content-length")
            return ArtifactInfo(
                file=filename.split(";")[0].strip().strip('"') or None,
                size=int(size) if size and size.isdigit() else None,
            )

    def get_internal_rate_limit(self) -> RateLimitSnapshot:
        return self.rate_limits.internal

    def get_external_rate_limit(self) -> RateLimitSnapshot:
        return self.rate_limits.external

    def close(self):
        self._client.close()


# Singleton cache
_clients: dict[str | None, GitHubRestClient] = {}


def get_client(token=None) -> GitHubRestClient:
    """Get or create a GitHubRestClient for the given token."""
    if token not in _clients:
        _clients[token] = GitHubRestClient(token=token)
    return _clients[token]
