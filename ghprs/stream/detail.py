"""Detail fetcher: concurrent per-item detail requests for one page."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Generic, Iterator, Sequence, TypeVar, Union

from ghprs.stream.errors import DetailFetchError
from ghprs.stream.events import ErrorEvent, ItemEvent

K = TypeVar("K")
T = TypeVar("T")

LOG = logging.getLogger("ghprs.stream.detail")


class DetailFetcher(Generic[K, T]):
    """Fetches the detail record of every identifier of a page at once.

    One worker per identifier. Results are yielded in completion order, a
    failure is yielded as an ErrorEvent without cancelling its siblings, and
    iteration ends only when every fetch has resolved.
    """

    def __init__(self, detail_call: Callable[[K], T], label: str = "detail") -> None:
        self._detail_call = detail_call
        self._label = label

    def fetch_all(self, identifiers: Sequence[K]) -> Iterator[Union[ItemEvent[T], ErrorEvent]]:
        if not identifiers:
            return
        with ThreadPoolExecutor(
            max_workers=len(identifiers),
            thread_name_prefix=f"ghprs-{self._label}",
        ) as executor:
            futures = {executor.submit(self._detail_call, ident): ident for ident in identifiers}
            for future in as_completed(futures):
                ident = futures[future]
                try:
                    detail = future.result()
                except Exception as e:
                    LOG.debug("%s %s failed: %s", self._label, ident, e)
                    yield ErrorEvent(DetailFetchError(self._label, ident, e))
                    continue
                yield ItemEvent(detail)
