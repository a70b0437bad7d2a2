"""CLI commands for listing and downloading repository archives."""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path


def _add_kind(parser):
    parser.add_argument(
        "--kind",
        choices=["tags", "releases"],
        default="tags",
        help="Collection to enumerate (default: tags)",
    )


def _collection_url(repository, kind):
    from .list_downloadables import releases_url, tags_url

    return releases_url(repository) if kind == "releases" else tags_url(repository)


def _dump(obj):
    json.dump(obj, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def main():
    parser = argparse.ArgumentParser(
        description="List and download GitHub tag and release archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Destination root for downloads (default: ./results)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="GitHub token (default: GITHUB_TOKEN from environment or .env)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List downloadable archives of a repository",
    )
    list_parser.add_argument("repository", help="Repository as owner/name")
    _add_kind(list_parser)

    # download subcommand
    download_parser = subparsers.add_parser(
        "download",
        help="Download every archive of a repository",
    )
    download_parser.add_argument("repository", help="Repository as owner/name")
    _add_kind(download_parser)

    # total subcommand
    total_parser = subparsers.add_parser(
        "total",
        help="Count the records in a repository's collection",
    )
    total_parser.add_argument("repository", help="Repository as owner/name")
    _add_kind(total_parser)

    # latest-release subcommand
    latest_parser = subparsers.add_parser(
        "latest-release",
        help="Show a repository's latest release",
    )
    latest_parser.add_argument("repository", help="Repository as owner/name")

    # api subcommand
    api_parser = subparsers.add_parser(
        "api",
        help="Make a single GitHub API GET call",
    )
    api_parser.add_argument("url", help="Full API URL")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from .client import get_client

    client = get_client(token=args.token)

    if args.command == "list":
        from .list_downloadables import list_downloadables

        descriptors = list_downloadables(
            client, args.repository, _collection_url(args.repository, args.kind), show_progress=False
        )
        _dump([asdict(d) for d in descriptors])
    elif args.command == "download":
        from .download_all import download_all
        from .list_downloadables import list_downloadables

        descriptors = list_downloadables(client, args.repository, _collection_url(args.repository, args.kind))
        print(f"Downloading {len(descriptors):,} archives to {args.output_dir}", flush=True)
        results = download_all(client, args.output_dir, descriptors)
        counts = {status: sum(1 for r in results if r.status == status) for status in ("downloaded", "skipped", "error")}
        print(
            f"\nDone: {counts['downloaded']} downloaded, {counts['skipped']} skipped, {counts['error']} errors"
        )
        print(f"Rate limit: {asdict(client.get_internal_rate_limit())}")
    elif args.command == "total":
        print(client.get_total(_collection_url(args.repository, args.kind)))
    elif args.command == "latest-release":
        envelope = client.get_latest_release(args.repository)
        _dump(envelope.data)
        print(f"Rate limit: {asdict(client.get_external_rate_limit())}", file=sys.stderr)
    elif args.command == "api":
        envelope = client.get_results(args.url)
        _dump(envelope.data)


if __name__ == "__main__":
    main()
