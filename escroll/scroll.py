"""Scroll session controller: fetch, decode and emit pages until exhausted."""

import json
import math
import threading
import time
from collections.abc import Callable

import httpx

from . import log as log_mod
from .decoder import decode_page, page_size_hint
from .errors import FetchError, ScrollCancelled
from .models import EMPTY_PAGE_THRESHOLD, Page, ScrollState, SearchRequest
from .progress import estimate_progress, format_duration
from .query import scroll_duration, to_continuation_query
from .transport import Transport
from .validator import validate_request


class ScrollSession:
    """Drive one scroll over a search's full result set.

    Pages are fetched strictly one after another: each scroll id is valid for
    exactly one continuation request.
    """

    def __init__(
        self,
        request: SearchRequest,
        transport: Transport,
        *,
        empty_threshold: int = EMPTY_PAGE_THRESHOLD,
        cancel_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
        log: Callable[[str, str], None] = log_mod.log,
    ):
        self.request = request
        self.transport = transport
        self.empty_threshold = empty_threshold
        self.cancel_event = cancel_event
        self.clock = clock
        self.log = log

    def _elapsed_ms(self, state: ScrollState) -> int:
        return int((self.clock() - state.started_at) * 1000)

    def _fetch(self, path: str, body: bytes) -> Page:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise ScrollCancelled("Scroll cancelled")
        try:
            resp = self.transport.request("POST", path, body)
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {path} failed: {e}") from e
        if not resp.ok:
            raise FetchError(
                f"Request to {path} returned status {resp.status}",
                status=resp.status,
                body=resp.text,
            )
        return decode_page(resp.body)

    def run(self, emit: Callable[[object], None]) -> ScrollState:
        """Run the session to completion, handing each document to ``emit``.

        Returns the final state. Every failure raises a ``ScrollError``
        subclass and stops the session where it is.
        """
        validate_request(self.request, self.transport)
        duration = scroll_duration(self.request.query)
        continuation = to_continuation_query(self.request.query)
        state = ScrollState(
            page_size=page_size_hint(self.request.body, warn=self.log),
            started_at=self.clock(),
        )
        if state.page_size <= self.empty_threshold:
            self.log(
                log_mod.WARN,
                f"Page size {state.page_size} is not above the empty threshold "
                f"{self.empty_threshold}; the first page will end the scroll",
            )

        page = self._fetch(self.request.query, self.request.body)
        if page.total is not None:
            state.total_pages = math.ceil(page.total / state.page_size)
            self.log(
                log_mod.INFO,
                f"{page.total} hits in about {state.total_pages} pages of {state.page_size}",
            )
        else:
            self.log(log_mod.WARN, "Response has no hits.total, progress can't be estimated")

        while len(page) > self.empty_threshold:
            for doc in page.documents:
                emit(doc)
            state.hits_emitted += len(page)
            state.pages_completed = state.page
            self._report(state)

            state.scroll_id = page.scroll_id
            state.page += 1
            body = json.dumps({"scroll": duration, "scroll_id": state.scroll_id}).encode()
            page = self._fetch(continuation, body)

        self.log(
            log_mod.OK,
            f"Finished {state.pages_completed} pages ({state.hits_emitted} hits) "
            f"in {format_duration(self._elapsed_ms(state))}",
        )
        return state

    def _report(self, state: ScrollState) -> None:
        if state.total_pages is None:
            self.log(log_mod.INFO, f"Page {state.pages_completed} done")
            return
        snapshot = estimate_progress(
            self._elapsed_ms(state), state.pages_completed, state.total_pages
        )
        self.log(
            log_mod.INFO,
            f"Page {snapshot.completed}/{snapshot.total} done, "
            f"{format_duration(snapshot.remaining_ms)} remaining",
        )
