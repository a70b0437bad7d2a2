"""Download listed archives into per-repository directories."""

import logging
import os
import sys
from pathlib import Path

logging.getLogger("httpx").setLevel(logging.ERROR)
logging.getLogger("httpcore").setLevel(logging.ERROR)

from ..client import GitHubRestClient
from ..models import ApiError, DownloadDescriptor, DownloadResult, NetworkError

CHUNK_SIZE = 64 * 1024
PART_SUFFIX = ".part"


def _progress(msg: str):
    sys.stdout.write(f"\033[2K\r{msg}")
    sys.stdout.flush()


def _log(msg: str):
    sys.stderr.write(f"\033[2K\r[download] {msg}\n")
    sys.stderr.flush()


def _single_segment(value: str) -> str:
    return value.replace("/", "-").replace("\\", "-")


def repo_dir_name(repository: str) -> str:
    """Directory name for a repository: ``owner/name`` -> ``owner-name``."""
    return _single_segment(repository)


def archive_path(destination_root: Path, descriptor: DownloadDescriptor) -> Path:
    return Path(destination_root) / repo_dir_name(descriptor.repository) / f"{_single_segment(str(descriptor.name))}.zip"


def fetch_download(client: GitHubRestClient, descriptor: DownloadDescriptor, path: Path) -> None:
    """Stream one archive to ``path``.

    The body goes to a ``.part`` sibling first and is renamed on completion,
    so a file at ``path`` is always a complete download.
    """
    part = path.with_name(path.name + PART_SUFFIX)
    try:
        with client.stream(descriptor.url) as resp:
            if not 200 <= resp.status_code < 300:
                raise ApiError(resp.status_code, f"download of {descriptor.url} failed")
            with open(part, "wb") as f:
                for chunk in resp.iter_bytes(CHUNK_SIZE):
                    f.write(chunk)
        os.replace(part, path)
    except BaseException:
        part.unlink(missing_ok=True)
        raise


def download_one(client: GitHubRestClient, destination_root: Path, descriptor: DownloadDescriptor) -> DownloadResult:
    """Download a single descriptor, reporting failures as an error result."""
    if descriptor.name is None or not descriptor.url:
        return DownloadResult(descriptor, status="error", error="descriptor has no name or url")

    path = archive_path(destination_root, descriptor)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists():
            return DownloadResult(descriptor, path=path, status="skipped")
        fetch_download(client, descriptor, path)
    except (OSError, NetworkError, ApiError) as e:
        return DownloadResult(descriptor, path=path, status="error", error=str(e))
    return DownloadResult(descriptor, path=path, status="downloaded")


def download_all(
    client: GitHubRestClient,
    destination_root: Path,
    descriptors: list[DownloadDescriptor] | None,
) -> list[DownloadResult]:
    """Download every descriptor in order, one at a time.

    Archives already on disk are skipped without a request, so re-running
    over the same destination only fetches what is missing. Per-item
    failures are logged and collected; they do not stop the run.
    """
    if not descriptors:
        return []

    total = len(descriptors)
    results = []
    stats = {"downloaded": 0, "skipped": 0, "error": 0}
    for i, descriptor in enumerate(descriptors):
        result = download_one(client, destination_root, descriptor)
        results.append(result)
        stats[result.status] += 1
        if result.status == "error":
            _log(f"{descriptor.repository} {descriptor.name}: {result.error}")
        _progress(
            f"  [{i + 1}/{total}] {stats['downloaded']} downloaded, "
            f"{stats['skipped']} skipped, {stats['error']} errors"
        )

    sys.stdout.write("\n")
    sys.stdout.flush()
    return results
