"""Parse search query strings and rewrite them for scroll continuation.

A query is ``path?params``. Parameters are parsed into an ordered mapping and
filtered through a per-phase allow-list, so their order in the input never
matters.
"""

import re
from urllib.parse import parse_qsl, urlencode

from .errors import ValidationError
from .models import SCROLL_PATH

SCROLL_PARAM = "scroll"
FILTER_PATH_PARAM = "filter_path"

# Parameters that still mean something on /_search/scroll. Everything else
# (size, filter_path, _source, q, sort, ...) only applies to the initial search.
CONTINUATION_PARAMS = (SCROLL_PARAM, "rest_total_hits_as_int")

_DURATION_RE = re.compile(r"^[1-9][0-9]*(d|h|m|s|ms|micros|nanos)$")


def parse_query(query: str) -> tuple[str, dict[str, str]]:
    """Split a query into its path and an ordered mapping of parameters.

    Repeated parameters keep their last value. Bare flags (``?pretty``) map
    to an empty string.
    """
    path, _, raw = query.partition("?")
    params = dict(parse_qsl(raw, keep_blank_values=True))
    return path, params


def build_query(path: str, params: dict[str, str]) -> str:
    if not params:
        return path
    return f"{path}?{urlencode(params, safe=',*')}"


def is_valid_duration(value: str) -> bool:
    return bool(_DURATION_RE.match(value))


def scroll_duration(query: str) -> str:
    """Return the query's scroll duration, e.g. ``"30s"``."""
    _, params = parse_query(query)
    value = params.get(SCROLL_PARAM)
    if value is None:
        raise ValidationError(
            f"The query {query} has no scroll parameter. Should be like: /_search?scroll=30s"
        )
    if not is_valid_duration(value):
        raise ValidationError(
            f"The query {query} has an invalid scroll duration {value!r}. "
            "Use a positive integer and one of d, h, m, s, ms, micros, nanos"
        )
    return value


def to_continuation_query(query: str) -> str:
    """Rewrite an initial search query into a ``/_search/scroll`` query.

    Running it again on its own output returns the same string.
    """
    scroll_duration(query)
    _, params = parse_query(query)
    kept = {name: params[name] for name in CONTINUATION_PARAMS if name in params}
    return build_query(SCROLL_PATH, kept)
