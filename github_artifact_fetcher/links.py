"""Parse GitHub ``Link`` pagination headers."""

import re
from urllib.parse import parse_qs, urlsplit

from .models import PaginationLink

_ENTRY = re.compile(r"<([^>]*)>([^,]*)")
_REL = re.compile(r'rel="?([^";]+)"?')


def page_number_from_url(url: str) -> int | None:
    """Integer value of the ``page`` query parameter, or None."""
    values = parse_qs(urlsplit(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def parse_link_header(value: str | None) -> dict[str, PaginationLink] | None:
    """Split a ``Link`` header into relations.

    Returns None when the header is absent and an empty dict when it is
    present but blank.
    """
    if value is None:
        return None

    links: dict[str, PaginationLink] = {}
    # URLs may contain commas, so match whole <url>; params entries
    for entry in _ENTRY.finditer(value):
        url, params = entry.group(1), entry.group(2)
        for param in params.split(";"):
            match = _REL.search(param)
            if match:
                # rel may list several space-separated relation types
                for relation in match.group(1).split():
                    links[relation] = PaginationLink(relation, url, page_number_from_url(url))
    return links


def last_page(links: dict[str, PaginationLink] | None) -> int | None:
    """Page number of the ``last`` relation. None and {} both mean no pagination."""
    if not links or "last" not in links:
        return None
    return links["last"].page_number
