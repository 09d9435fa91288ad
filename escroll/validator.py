"""Checks run before a scroll session touches the backend's data."""

from fnmatch import fnmatchcase

import httpx

from .errors import ConnectivityError, PolicyViolation, ValidationError
from .query import FILTER_PATH_PARAM, parse_query, scroll_duration

DELETE_BY_QUERY_MARKER = "delete_by_query"
SCROLL_ID_FIELD = "_scroll_id"
TOTAL_HITS_FIELD = "hits.total"

# Fields a filtered response must still carry
REQUIRED_FIELDS = {
    SCROLL_ID_FIELD: "needed to continue the scroll",
    TOTAL_HITS_FIELD: "needed to track progress",
}


def _covers(pattern: str, field: str) -> bool:
    """True if a filter_path pattern selects ``field`` or one of its parents."""
    if fnmatchcase(field, pattern):
        return True
    parts = field.split(".")
    return any(fnmatchcase(".".join(parts[:i]), pattern) for i in range(1, len(parts)))


def filter_keeps(filter_path: str, field: str) -> bool:
    """Whether a response filtered by ``filter_path`` still carries ``field``.

    Includes are ORed; any matching exclude (``-`` prefix) drops the field.
    A filter made only of excludes keeps everything it doesn't name.
    """
    patterns = [p.strip() for p in filter_path.split(",") if p.strip()]
    includes = [p for p in patterns if not p.startswith("-")]
    excludes = [p[1:] for p in patterns if p.startswith("-")]
    if any(_covers(p, field) for p in excludes):
        return False
    if not includes:
        return True
    return any(_covers(p, field) for p in includes)


def check_query(query: str) -> None:
    """Static checks on the query string. Makes no network calls."""
    if DELETE_BY_QUERY_MARKER in query:
        raise PolicyViolation("escroll wasn't made to do delete queries.")

    path, params = parse_query(query)
    if path.rstrip("/").rsplit("/", 1)[-1] != "_search":
        raise ValidationError(
            f"The query {query} is not a search. Should be like: /index/_search?scroll=30s"
        )

    scroll_duration(query)

    filter_path = params.get(FILTER_PATH_PARAM)
    if filter_path is None:
        return
    for field, reason in REQUIRED_FIELDS.items():
        if not filter_keeps(filter_path, field):
            raise ValidationError(f"filter_path={filter_path} drops {field}, which is {reason}")


def check_connection(transport) -> None:
    """Liveness probe against the host's root endpoint."""
    try:
        resp = transport.probe()
    except httpx.HTTPError as e:
        raise ConnectivityError(f"Can't reach {transport.host}: {e}") from e
    if not resp.ok:
        raise ConnectivityError(
            f"Can't talk to elasticsearch. Status Code: {resp.status}", status=resp.status
        )


def validate_request(request, transport) -> None:
    """Reject unsafe or incomplete requests, then confirm the host is up."""
    check_query(request.query)
    check_connection(transport)
