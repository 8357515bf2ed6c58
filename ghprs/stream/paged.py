"""Paged fetcher: drives one paginated listing in a background thread."""

import logging
import threading
from typing import Callable, Generic, Iterable, TypeVar

from ghprs.models import Page
from ghprs.stream.errors import PageFetchError
from ghprs.stream.events import Event, EventStream, ItemEvent

T = TypeVar("T")

LOG = logging.getLogger("ghprs.stream.paged")

ListCall = Callable[[int], Page[T]]
Expand = Callable[[list[T]], Iterable[Event]]


def _items_as_events(items: list[T]) -> Iterable[Event]:
    return (ItemEvent(item) for item in items)


class PagedFetcher(Generic[T]):
    """Requests pages 1, 2, 3, ... and emits their items on an EventStream.

    A failed page is reported as an ErrorEvent and pagination carries on
    while the failure still reports a following page. The stream is closed
    exactly once, after the last page has been fully emitted.

    ``expand`` turns one page's items into the events to emit. The next page
    is not requested until every event of the current page has been handed
    to the stream.
    """

    def __init__(self, list_call: ListCall, label: str = "listing", expand: Expand | None = None) -> None:
        self._list_call = list_call
        self._label = label
        self._expand = expand or _items_as_events

    def start(self) -> EventStream[T]:
        """Start the producer thread and return the stream it feeds."""
        stream: EventStream[T] = EventStream(name=self._label)
        thread = threading.Thread(
            target=self._run,
            args=(stream,),
            name=f"ghprs-{self._label}",
            daemon=True,
        )
        stream.producer = thread
        thread.start()
        return stream

    def _fetch_page(self, stream: EventStream[T], page_number: int) -> tuple[list[T], bool]:
        try:
            page = self._list_call(page_number)
        except Exception as e:
            LOG.debug("%s page %s failed: %s", self._label, page_number, e)
            error = PageFetchError(self._label, page_number, e)
            stream.fail(error)
            return [], error.has_next
        LOG.debug("%s page %s: %s items, next=%s", self._label, page_number, len(page.items), page.has_next)
        return list(page.items), page.has_next

    def _emit_page(self, stream: EventStream[T], items: list[T]) -> None:
        events = self._expand(items)
        try:
            for event in events:
                if not stream.put(event):
                    return
        finally:
            # waits for in-flight work of an expansion left half-consumed
            close = getattr(events, "close", None)
            if close is not None:
                close()

    def _run(self, stream: EventStream[T]) -> None:
        page_number = 1
        try:
            while not stream.cancelled:
                items, has_next = self._fetch_page(stream, page_number)
                self._emit_page(stream, items)
                if not has_next:
                    break
                page_number += 1
        finally:
            stream.close()
