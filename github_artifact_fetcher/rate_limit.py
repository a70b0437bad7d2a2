"""Track rate-limit counters reported by the server."""

from .models import RateLimitSnapshot


class RateLimitTracker:
    """Latest rate-limit snapshots for internal and external requests.

    Internal snapshots come from pagination-driving requests, external ones
    from single caller-facing requests. Each record call replaces the stored
    snapshot wholesale; fields missing from the new snapshot become None.
    Not thread-safe: updates are expected from one sequential caller.
    """

    def __init__(self):
        self._internal = RateLimitSnapshot()
        self._external = RateLimitSnapshot()

    def record_internal(self, snapshot: RateLimitSnapshot) -> None:
        self._internal = snapshot

    def record_external(self, snapshot: RateLimitSnapshot) -> None:
        self._external = snapshot

    @property
    def internal(self) -> RateLimitSnapshot:
        return self._internal

    @property
    def external(self) -> RateLimitSnapshot:
        return self._external
