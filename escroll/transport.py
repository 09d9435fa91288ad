"""HTTP transport for a single Elasticsearch host using httpx."""

import httpx

from .models import ApiResponse


def base_url(host: str) -> str:
    """Turn ``localhost:9200`` into ``http://localhost:9200``; keep explicit schemes."""
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


class Transport:
    """Thin blocking client: one request in, status and raw body out.

    No retry and no caching. A scroll id is single use, so replaying a
    request would skip or duplicate a page. Transport failures propagate as
    ``httpx.HTTPError``.
    """

    def __init__(self, host: str, timeout: float = 30.0, transport: httpx.BaseTransport | None = None):
        self.host = host
        self._client = httpx.Client(
            base_url=base_url(host),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def request(self, method: str, path: str, body: bytes | None = None) -> ApiResponse:
        """Send one request.

        Args:
            method: HTTP method
            path: path plus query string, relative to the host
            body: raw JSON body, or None to send none

        Returns:
            ApiResponse with the status code and the unparsed body.
        """
        resp = self._client.request(method, path, content=body or None)
        return ApiResponse(status=resp.status_code, body=resp.content)

    def probe(self) -> ApiResponse:
        return self.request("GET", "/")

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
