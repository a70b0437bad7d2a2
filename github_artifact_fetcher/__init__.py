"""List and download the archives of GitHub tags and releases.

Walks paginated REST collections while tracking the server's rate-limit
counters, then streams each archive to a per-repository directory.
"""

from .cli import main
from .client import GitHubRestClient, get_client
from .download_all import download_all
from .list_downloadables import list_downloadables
from .models import ApiError, DownloadDescriptor, NetworkError, RateLimitSnapshot, RequestEnvelope

__all__ = [
    "main",
    "GitHubRestClient",
    "get_client",
    "download_all",
    "list_downloadables",
    "ApiError",
    "DownloadDescriptor",
    "NetworkError",
    "RateLimitSnapshot",
    "RequestEnvelope",
]

if __name__ == "__main__":
    main()
