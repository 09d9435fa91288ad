"""Decode search responses into pages."""

import json

from . import log
from .errors import DecodeError
from .models import DEFAULT_PAGE_SIZE, Page


def _parse_total(hits: dict) -> int | None:
    # 6.x and rest_total_hits_as_int return an int, 7.x+ an object
    total = hits.get("total")
    if total is None:
        return None
    if isinstance(total, dict):
        total = total.get("value")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise DecodeError(f"Unexpected hits.total in response: {hits.get('total')!r}")
    return total


def decode_page(raw: bytes) -> Page:
    """Parse one search or scroll response body.

    Hits are kept exactly as decoded; nothing beyond the wrapper shape is read.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

    scroll_id = data.get("_scroll_id")
    if not isinstance(scroll_id, str) or not scroll_id:
        raise DecodeError("Response has no _scroll_id")

    hits = data.get("hits")
    if not isinstance(hits, dict) or not isinstance(hits.get("hits"), list):
        raise DecodeError("Response has no hits.hits list")

    return Page(scroll_id=scroll_id, total=_parse_total(hits), hits=hits["hits"])


def page_size_hint(body: bytes, warn=log.log) -> int:
    """Page size requested by the initial body's ``size`` field.

    A missing size is not an error: the backend uses its default of 10.
    """
    if not body.strip():
        warn(log.WARN, f"No request body, assuming a page size of {DEFAULT_PAGE_SIZE}")
        return DEFAULT_PAGE_SIZE

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Request body is not valid JSON: {e}") from e

    size = data.get("size") if isinstance(data, dict) else None
    if size is None:
        warn(log.WARN, f"No size in request body, assuming a page size of {DEFAULT_PAGE_SIZE}")
        return DEFAULT_PAGE_SIZE
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise DecodeError(f"Request body size must be a positive integer, got {size!r}")
    return size
