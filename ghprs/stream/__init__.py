"""Concurrent paginated fetch pipeline (producer threads and event streams)."""

from ghprs.stream.detail import DetailFetcher
from ghprs.stream.errors import DetailFetchError, FetchError, PageFetchError
from ghprs.stream.events import DONE, ErrorEvent, EventStream, ItemEvent, StreamClosedError
from ghprs.stream.listings import open_pull_request_stream, open_repository_stream
from ghprs.stream.paged import PagedFetcher

__all__ = [
    "DONE",
    "DetailFetchError",
    "DetailFetcher",
    "ErrorEvent",
    "EventStream",
    "FetchError",
    "ItemEvent",
    "PageFetchError",
    "PagedFetcher",
    "StreamClosedError",
    "open_pull_request_stream",
    "open_repository_stream",
]
