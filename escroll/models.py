"""Data models and constants for scroll sessions."""

from dataclasses import dataclass, field

DEFAULT_PAGE_SIZE = 10  # Elasticsearch's own default when the body has no "size"
EMPTY_PAGE_THRESHOLD = 4  # A page with this many hits or fewer ends the scroll
SCROLL_PATH = "/_search/scroll"
DEFAULT_QUERY = "/_search?scroll=1m"


@dataclass(frozen=True)
class SearchRequest:
    """The initial search as given by the caller."""

    host: str
    query: str
    body: bytes = b""


@dataclass
class ApiResponse:
    """Response from a single transport call."""

    status: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass
class Page:
    """One decoded batch of hits."""

    scroll_id: str
    total: int | None
    hits: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hits)

    @property
    def documents(self):
        """Yield each hit's ``_source``, or the hit itself when it carries none."""
        for hit in self.hits:
            if isinstance(hit, dict) and "_source" in hit:
                yield hit["_source"]
            else:
                yield hit


@dataclass
class ScrollState:
    """Mutable state of one running scroll session."""

    page_size: int
    started_at: float
    scroll_id: str | None = None
    page: int = 1
    total_pages: int | None = None
    pages_completed: int = 0
    hits_emitted: int = 0


@dataclass(frozen=True)
class ProgressSnapshot:
    completed: int
    total: int
    elapsed_ms: int
    remaining_ms: int
