"""Fake Elasticsearch backend for integration tests.

Requests go through a real httpx.Client; only the network is replaced by
httpx.MockTransport.
"""

import json

import httpx
import pytest

from escroll.transport import Transport


class FakeBackend:
    """Serves pre-built pages through the scroll API and records every request."""

    def __init__(self, page_sizes, total=None, filter_total=False):
        self.pages = []
        n = 0
        for i, size in enumerate(page_sizes):
            hits = [{"_index": "idx", "_id": str(n + j), "_source": {"n": n + j}} for j in range(size)]
            n += size
            self.pages.append({"_scroll_id": f"scroll-{i}", "hits": {"hits": hits}})
        total = n if total is None else total
        if not filter_total:
            self.pages[0]["hits"]["total"] = {"value": total, "relation": "eq"}
        self.requests = []
        self.probe_status = 200
        self.fail = {}  # page index -> httpx.Response or exception

    def _respond(self, index):
        failure = self.fail.get(index)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return failure
        return httpx.Response(200, json=self.pages[index])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/":
            return httpx.Response(self.probe_status, json={"tagline": "You Know, for Search"})
        if request.url.path == "/_search/scroll":
            body = json.loads(request.content)
            index = int(body["scroll_id"].rsplit("-", 1)[1]) + 1
            return self._respond(index)
        return self._respond(0)

    @property
    def searches(self):
        return [r for r in self.requests if r.method == "POST"]

    def transport(self, timeout=30.0):
        return Transport("localhost:9200", timeout=timeout, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def backend():
    return FakeBackend([10, 10, 5, 0])


@pytest.fixture
def make_backend():
    return FakeBackend
