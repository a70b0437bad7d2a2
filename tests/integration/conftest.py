"""Fake GitHub REST API served through httpx.MockTransport."""

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from github_artifact_fetcher.client import GitHubRestClient

API = "https://api.github.com"


class FakeGitHub:
    """Serves paginated tag collections and zipball downloads.

    Pages are addressed 0..N-1 and every page advertises ``last`` as N.
    Each response decrements a shared rate-limit counter.
    """

    def __init__(self, limit=5000):
        self.tags: dict[str, list[dict]] = {}
        self.requests: list[str] = []
        self.limit = limit
        self.used = 0

    def add_repo(self, repository, count):
        self.tags[repository] = [
            {
                "id": i,
                "name": f"v{count - i}.0",
                "zipball_url": f"{API}/repos/{repository}/zipball/refs/tags/v{count - i}.0",
            }
            for i in range(count)
        ]

    def _headers(self):
        self.used += 1
        return {
            "x-ratelimit-used": str(self.used),
            "x-ratelimit-limit": str(self.limit),
            "x-ratelimit-remaining": str(self.limit - self.used),
            "x-ratelimit-reset": "1700000000",
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = urlsplit(str(request.url))
        self.requests.append(str(request.url))
        parts = url.path.strip("/").split("/")

        if parts[:1] == ["repos"] and len(parts) >= 4:
            repository = f"{parts[1]}/{parts[2]}"
            if parts[3] == "zipball":
                if repository not in self.tags:
                    return httpx.Response(404, json={"message": "Not Found"})
                return httpx.Response(200, content=f"PK:{url.path}".encode())
            if parts[3] == "tags":
                return self._tags_page(repository, url)

        return httpx.Response(404, json={"message": "Not Found"}, headers=self._headers())

    def _tags_page(self, repository, url):
        if repository not in self.tags:
            return httpx.Response(404, json={"message": "Not Found"}, headers=self._headers())
        query = parse_qs(url.query)
        per_page = int(query.get("per_page", ["30"])[0])
        page = int(query.get("page", ["0"])[0])
        items = self.tags[repository]
        pages = max(1, -(-len(items) // per_page))
        headers = self._headers()
        if pages > 1:
            base = f"{API}{url.path}?q=&per_page={per_page}"
            rels = [f'<{base}&page={pages}>; rel="last"']
            if page + 1 < pages:
                rels.insert(0, f'<{base}&page={page + 1}>; rel="next"')
            headers["link"] = ", ".join(rels)
        return httpx.Response(200, json=items[page * per_page:(page + 1) * per_page], headers=headers)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def client(fake_github):
    c = GitHubRestClient(token="test-token", transport=httpx.MockTransport(fake_github.handler))
    yield c
    c.close()
