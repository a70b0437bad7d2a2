"""List the downloadable archives of a repository's tags or releases."""

import sys

from ..client import GitHubRestClient
from ..models import DownloadDescriptor
from ..settings import get_settings

ARCHIVE_URL_FIELD = "zipball_url"


def _progress(msg: str):
    sys.stdout.write(f"\033[2K\r{msg}")
    sys.stdout.flush()


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[list] {msg}\n")
    sys.stderr.flush()


def tags_url(repository: str) -> str:
    return f"{get_settings().github_api_url.rstrip('/')}/repos/{repository}/tags"


def releases_url(repository: str) -> str:
    return f"{get_settings().github_api_url.rstrip('/')}/repos/{repository}/releases"


def to_descriptor(repository: str, record) -> DownloadDescriptor:
    """Map one collection record. Missing fields become None rather than failing."""
    if not isinstance(record, dict):
        record = {}
    return DownloadDescriptor(
        repository=repository,
        id=record.get("id"),
        name=record.get("name"),
        url=record.get(ARCHIVE_URL_FIELD),
    )


def list_downloadables(
    client: GitHubRestClient,
    repository: str,
    collection_url: str,
    show_progress: bool = True,
) -> list[DownloadDescriptor]:
    """Walk every page of ``collection_url`` and return one descriptor per record.

    Order follows the collection (page order, then item order). A
    NetworkError on any page propagates and nothing is returned. Pass
    ``show_progress=False`` to keep stdout free for machine-readable output.
    """
    descriptors = []
    for envelope in client.iter_pages(collection_url):
        error = envelope.api_error
        if error is not None:
            _log(f"{repository}: {error}")
        for record in envelope.items:
            descriptor = to_descriptor(repository, record)
            if show_progress:
                _progress(f"  {descriptor.id} {descriptor.name}")
            descriptors.append(descriptor)

    if show_progress and descriptors:
        sys.stdout.write("\n")
        sys.stdout.flush()
    return descriptors
